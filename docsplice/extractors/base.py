"""
Base Extractor Interface

This module defines the line-scanning state machine shared by all block
extractors, and the registry that runs them over discovered files.

Design Principles:
    1. One extractor per block syntax
    2. Two explicit states (IDLE, COLLECTING) plus an accumulating buffer
    3. Fail fast: a block that cannot become a record aborts the run
    4. A block still open at end of input is dropped with a warning

Usage Pattern:
    1. Discovery produces a DiscoveryResult with the source files
    2. The registry reads each file once and splits it into lines
    3. Every registered extractor scans the same lines independently
    4. Their records are concatenated in registration order
"""

import re
from abc import ABC, abstractmethod
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from docsplice.discovery import DiscoveryResult
from docsplice.schema import Doc


class ScanState(Enum):
    """States of a block scanner."""
    IDLE = auto()           # Outside any block
    COLLECTING = auto()     # Between an open sentinel and its close


class BlockExtractor(ABC):
    """
    Abstract base class for comment-block extractors.

    The scan loop lives here; subclasses describe the block syntax:
        - open_pattern: regex a line must match to start a block
        - is_close(): whether a line ends the current block
        - collect_line(): how a line is added to the buffer
        - finish_block(): turn the buffer into a record (or None)

    A line matching open_pattern always starts a fresh block, even while
    another block is being collected.

    Attributes:
        name: Human-readable identifier for this extractor
        open_pattern: Compiled regex for the open sentinel
    """

    name: str = "Base"
    open_pattern: re.Pattern[str]

    def __init__(self):
        """Initialize the extractor."""
        self._warnings: list[str] = []

    def add_warning(self, message: str) -> None:
        """
        Record a non-fatal problem found while scanning.

        Args:
            message: The warning message to record
        """
        self._warnings.append(f"[{self.name}] {message}")

    def get_warnings(self) -> list[str]:
        """Get all warnings recorded so far."""
        return self._warnings.copy()

    def clear_warnings(self) -> None:
        """Clear all recorded warnings."""
        self._warnings = []

    @abstractmethod
    def is_close(self, line: str) -> bool:
        """Return True if `line` closes the block being collected."""

    @abstractmethod
    def collect_line(self, line: str) -> str:
        """Return the text to append to the buffer for `line`."""

    @abstractmethod
    def finish_block(self, path: Path, body: str) -> Optional[Doc]:
        """
        Convert a closed block into a record.

        Args:
            path: Source file the block came from
            body: Accumulated buffer

        Returns:
            The record, or None if the block yields nothing

        Raises:
            DocBlockError: If the block is malformed
        """

    def extract(self, path: Path, lines: list[str]) -> list[Doc]:
        """
        Scan `lines` and return the records of every closed block, in order.

        Args:
            path: Source file the lines came from (used in messages)
            lines: File content split on newlines

        Returns:
            Records in file order
        """
        docs: list[Doc] = []
        state = ScanState.IDLE
        buffer: list[str] = []
        opened_at = 0

        for lineno, line in enumerate(lines, start=1):
            if self.open_pattern.match(line):
                state = ScanState.COLLECTING
                buffer = []
                opened_at = lineno
            elif state is ScanState.COLLECTING and self.is_close(line):
                doc = self.finish_block(path, "".join(buffer))
                if doc is not None:
                    docs.append(doc)
                state = ScanState.IDLE
            elif state is ScanState.COLLECTING:
                buffer.append(self.collect_line(line))

        if state is ScanState.COLLECTING:
            self.add_warning(f"{path}:{opened_at}: block never closed, skipped")

        return docs


class ExtractorRegistry:
    """
    Runs a fixed sequence of extractors over source files.

    Usage:
        registry = ExtractorRegistry()
        registry.register(ConfigBlockExtractor())
        registry.register(TypeBlockExtractor())

        docs = registry.extract_all(discovery_result)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._extractors: list[BlockExtractor] = []

    def register(self, extractor: BlockExtractor) -> None:
        """
        Register an extractor with the registry.

        Extractors run in registration order.
        """
        self._extractors.append(extractor)

    def get_extractors(self) -> list[BlockExtractor]:
        """Get all registered extractors."""
        return self._extractors.copy()

    def get_warnings(self) -> list[str]:
        """Collect the warnings of every registered extractor."""
        warnings: list[str] = []
        for extractor in self._extractors:
            warnings.extend(extractor.get_warnings())
        return warnings

    def extract_text(self, path: Path, text: str) -> list[Doc]:
        """
        Run every extractor over one file's text.

        Args:
            path: Source file the text came from
            text: Full file content

        Returns:
            Records of the first extractor, then the second, and so on
        """
        lines = text.split("\n")
        docs: list[Doc] = []
        for extractor in self._extractors:
            docs.extend(extractor.extract(path, lines))
        return docs

    def extract_file(self, path: Path) -> list[Doc]:
        """
        Read a file and extract its records.

        Raises:
            OSError: If the file cannot be read
            DocBlockError: If a block is malformed
        """
        # Undecodable bytes become U+FFFD; only comment blocks matter here
        return self.extract_text(path, path.read_text(encoding="utf-8", errors="replace"))

    def extract_all(self, discovery_result: DiscoveryResult) -> list[Doc]:
        """
        Extract records from every discovered file.

        Warnings from a previous run are cleared first.

        Args:
            discovery_result: The result of file discovery

        Returns:
            All records, grouped by file in discovery order
        """
        for extractor in self._extractors:
            extractor.clear_warnings()

        docs: list[Doc] = []
        for source in discovery_result.files:
            docs.extend(self.extract_file(source.path))
        return docs
