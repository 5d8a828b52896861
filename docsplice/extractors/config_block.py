"""
Config Block Extractor

Extracts `@doc` blocks: TOML tables written inside a Lua long comment.

    --[=[@doc
      category = "source"
      name = "recent_files"
      desc = "Recently opened files"

      [[options]]
      name = "limit"
      type = "integer"
      default = "100"
    --]=]

The closing line may be written as `--]=]` or `]=]`. Lines in between are
kept verbatim, so multi-line TOML strings survive unchanged.
"""

import re
from pathlib import Path

from docsplice.errors import DocParseError, DocValidationError
from docsplice.extractors.base import BlockExtractor
from docsplice.schema import Doc, validate_doc

# Try to import tomllib (Python 3.11+) or fall back to tomli
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore


class ConfigBlockExtractor(BlockExtractor):
    """
    Parses `--[=[@doc ... --]=]` blocks and validates them.

    Raises DocParseError for TOML that does not parse and
    DocValidationError for tables that match no record shape. Both carry
    the file path and raw block text.
    """

    name = "ConfigBlock"
    open_pattern = re.compile(r"^\s*--\[=\[\s*@doc$")
    close_pattern = re.compile(r"^\s*(--)?\]=\]$")

    def is_close(self, line: str) -> bool:
        return self.close_pattern.match(line) is not None

    def collect_line(self, line: str) -> str:
        return line + "\n"

    def finish_block(self, path: Path, body: str) -> Doc:
        try:
            raw = tomllib.loads(body)
        except tomllib.TOMLDecodeError as e:
            raise DocParseError(f"Invalid TOML in doc block: {e}", path=path, block=body) from e

        try:
            return validate_doc(raw)
        except DocValidationError as e:
            raise DocValidationError(e.message, path=path, block=body) from e
