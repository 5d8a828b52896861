"""
docsplice File Discovery Module

This module walks a repository and collects the source files that may
carry documentation blocks.

Key Responsibilities:
    1. Walk the directory tree starting from a root path
    2. Skip version control, dependency and cache directories
    3. Keep only files with the configured extension (".lua" by default)
    4. Return files in a stable order so repeated runs render identically

Design Notes:
    - We use os.walk and sort directory/file names in place, which fixes
      both the traversal order and the final file order
    - Symlinked files are included and read through; symlinked
      directories are not descended into (os.walk default)
    - Errors reading the tree are not caught here; they abort the run
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSION = ".lua"

# Directories that never contain plugin sources worth documenting.
DEFAULT_IGNORE_DIRS: set[str] = {
    # Version control
    ".git",
    ".svn",
    ".hg",

    # Dependencies and tool caches
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    ".tox",
}


@dataclass
class DiscoveredFile:
    """
    A source file selected for extraction.

    Attributes:
        path: Absolute path to the file
        relative_path: Path relative to the repository root
    """
    path: Path
    relative_path: Path

    def __str__(self) -> str:
        return str(self.relative_path)


@dataclass
class DiscoveryResult:
    """
    Result of a discovery run.

    Attributes:
        root_path: The repository root that was scanned
        extension: File extension that was matched
        files: Matching files, in traversal order
        skipped_dirs: Directories that were not entered, with the reason
        warnings: Non-fatal observations about the scan
    """
    root_path: Path
    extension: str = DEFAULT_EXTENSION
    files: list[DiscoveredFile] = field(default_factory=list)
    skipped_dirs: list[tuple[str, str]] = field(default_factory=list)  # (path, reason)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_file_count(self) -> int:
        return len(self.files)


class FileDiscovery:
    """
    Finds source files under a repository root.

    Usage:
        discovery = FileDiscovery("/path/to/plugin")
        result = discovery.discover()

        for source in result.files:
            print(source.relative_path)

    Attributes:
        root_path: The repository root to scan
        extension: File suffix to match, including the dot
        ignore_dirs: Directory names that are never entered
    """

    def __init__(
        self,
        root_path: str | Path,
        extension: str = DEFAULT_EXTENSION,
        ignore_dirs: set[str] | None = None,
    ):
        """
        Initialize the file discovery.

        Args:
            root_path: Path to the repository root
            extension: File suffix to match (a leading dot is added if missing)
            ignore_dirs: Directory names to skip (defaults to DEFAULT_IGNORE_DIRS)

        Raises:
            FileNotFoundError: If root_path does not exist
            NotADirectoryError: If root_path is not a directory
        """
        self.root_path = Path(root_path).resolve()
        self.extension = extension if extension.startswith(".") else f".{extension}"
        self.ignore_dirs = DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs

        if not self.root_path.exists():
            raise FileNotFoundError(f"Path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {self.root_path}")

    def _should_skip_dir(self, name: str) -> tuple[bool, str]:
        """
        Check whether a directory should be left out of the walk.

        Returns:
            Tuple of (should_skip, reason)
        """
        if name in self.ignore_dirs:
            return True, f"Default ignore: {name}"
        return False, ""

    def _matches(self, path: Path) -> bool:
        return path.suffix == self.extension

    def discover(self) -> DiscoveryResult:
        """
        Walk the repository and collect matching files.

        Returns:
            DiscoveryResult with files in sorted traversal order
        """
        result = DiscoveryResult(root_path=self.root_path, extension=self.extension)

        def _raise(error: OSError) -> None:
            raise error

        for dirpath, dirnames, filenames in os.walk(self.root_path, onerror=_raise):
            current_dir = Path(dirpath)
            relative_dir = current_dir.relative_to(self.root_path)

            # Sorting dirnames in place fixes the order os.walk descends
            dirnames.sort()
            for dirname in list(dirnames):
                should_skip, reason = self._should_skip_dir(dirname)
                if should_skip:
                    dirnames.remove(dirname)
                    result.skipped_dirs.append((str(relative_dir / dirname), reason))

            for filename in sorted(filenames):
                file_path = current_dir / filename

                if not self._matches(file_path):
                    continue

                result.files.append(DiscoveredFile(
                    path=file_path,
                    relative_path=relative_dir / filename,
                ))

        if not result.files:
            result.warnings.append(
                f"No {self.extension} files found under {self.root_path}."
            )

        return result


def discover_files(
    path: str | Path,
    extension: str = DEFAULT_EXTENSION,
) -> DiscoveryResult:
    """
    Convenience function to discover source files in a repository.

    Args:
        path: Path to the repository root
        extension: File suffix to match (default ".lua")

    Returns:
        DiscoveryResult containing the matching files

    Example:
        result = discover_files("/path/to/plugin")
        for warning in result.warnings:
            print(f"Warning: {warning}")
    """
    return FileDiscovery(root_path=path, extension=extension).discover()
