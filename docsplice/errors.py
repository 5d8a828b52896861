"""
docsplice Errors

Every failure the generator reports on purpose derives from DocspliceError,
so the CLI can catch one type and print a readable message. Filesystem
errors are not wrapped; they propagate as OSError.
"""

from pathlib import Path
from typing import Optional


class DocspliceError(Exception):
    """Base class for all docsplice failures."""


class DocBlockError(DocspliceError):
    """
    A documentation block in a source file could not be turned into a record.

    Attributes:
        message: What went wrong
        path: Source file containing the block (None if not yet known)
        block: Raw text collected between the block sentinels
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        block: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.block = block

    def __str__(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text} (in {self.path})"
        if self.block is not None:
            text = f"{text}\n--- block ---\n{self.block.rstrip()}\n-------------"
        return text


class DocParseError(DocBlockError):
    """The block body is not valid TOML."""


class DocValidationError(DocBlockError):
    """The parsed block matches none of the known record shapes."""


class MarkerNotFoundError(DocspliceError):
    """A required marker line is missing from the README."""

    def __init__(self, marker: str):
        super().__init__(f"Marker not found: {marker}")
        self.marker = marker
