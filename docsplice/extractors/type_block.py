"""
Type Block Extractor

Extracts LuaCATS class definitions marked with `---@doc.type`:

    ---@doc.type
    ---@class deck.Item
    ---@field public display_text string
    ---@field public data? table

The block ends at the first empty line. Lines are stripped before they
are kept, and the block becomes a `type` record only if it contains an
`@class NAME` annotation.
"""

import re
from pathlib import Path
from typing import Optional

from docsplice.extractors.base import BlockExtractor
from docsplice.schema import TypeDoc

# Class name runs to the end of the line or up to a ":" (parent class).
CLASS_PATTERN = re.compile(r"@class\s+([^:\n]+)")


class TypeBlockExtractor(BlockExtractor):
    """Collects `---@doc.type` blocks into TypeDoc records."""

    name = "TypeBlock"
    open_pattern = re.compile(r"^\s*---@doc\.type$")

    def is_close(self, line: str) -> bool:
        return line == ""

    def collect_line(self, line: str) -> str:
        return line.strip() + "\n"

    def finish_block(self, path: Path, body: str) -> Optional[TypeDoc]:
        definition = body.strip()
        if not definition:
            return None

        match = CLASS_PATTERN.search(definition)
        if match is None:
            return None

        name = match.group(1).strip()
        if not name:
            self.add_warning(f"{path}: @class without a name, skipped")
            return None

        return TypeDoc(name=name, definition=definition)
