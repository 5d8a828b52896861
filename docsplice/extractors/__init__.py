"""
Documentation block extractors.

This package contains the scanners that pull documentation records out of
Lua source files. Each extractor understands one block syntax.

Available Extractors:
    - ConfigBlockExtractor: `--[=[@doc ... --]=]` blocks holding TOML
    - TypeBlockExtractor: `---@doc.type` blocks holding an `@class` definition

Usage:
    from docsplice.extractors import create_default_registry

    registry = create_default_registry()
    docs = registry.extract_all(discovery_result)
"""

from docsplice.extractors.base import BlockExtractor, ExtractorRegistry, ScanState
from docsplice.extractors.config_block import ConfigBlockExtractor
from docsplice.extractors.type_block import TypeBlockExtractor


def create_default_registry() -> ExtractorRegistry:
    """Registry with the config-block scan first and the type-block scan second."""
    registry = ExtractorRegistry()
    registry.register(ConfigBlockExtractor())
    registry.register(TypeBlockExtractor())
    return registry


__all__ = [
    "BlockExtractor",
    "ConfigBlockExtractor",
    "ExtractorRegistry",
    "ScanState",
    "TypeBlockExtractor",
    "create_default_registry",
]
