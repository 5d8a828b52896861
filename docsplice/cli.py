"""
docsplice Command-Line Interface

This module provides the CLI entry point for docsplice. It orchestrates the
full pipeline: discovery -> extraction -> sort -> render & splice -> output.

Usage:
    docsplice
    docsplice /path/to/plugin
    docsplice --dry-run
    docsplice --check

Run from the plugin root with no arguments, it rewrites the generated
regions of README.md from the `@doc` blocks found in the Lua sources.
Any malformed block or missing README marker stops the run before the
README is touched.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from docsplice import __version__
from docsplice.discovery import DEFAULT_EXTENSION, discover_files
from docsplice.errors import DocspliceError
from docsplice.extractors import create_default_registry
from docsplice.renderer import DocRenderer, RenderOptions
from docsplice.schema import DocCategory, sort_docs
from docsplice.splice import update_readme


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="docsplice",
        description=(
            "docsplice: Generate README sections from documentation blocks "
            "in Lua source comments.\n\n"
            "Collects `--[=[@doc ... --]=]` and `---@doc.type` blocks and "
            "rewrites the README regions between "
            "<!-- auto-generate-s:CATEGORY --> and <!-- auto-generate-e:CATEGORY -->."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  docsplice                  # Update README.md in the current directory\n"
            "  docsplice /path/to/plugin  # Update the README of another checkout\n"
            "  docsplice --dry-run        # Print the updated README instead\n"
            "  docsplice --check          # Fail if README.md is out of date (CI)\n"
        ),
    )

    # Positional argument: repository path
    parser.add_argument(
        "path",
        type=str,
        nargs="?",
        default=".",
        help="Path to the plugin repository (default: current directory)",
    )

    parser.add_argument(
        "--readme",
        type=str,
        default="README.md",
        help="README to update, relative to the repository (default: README.md)",
    )

    parser.add_argument(
        "--extension",
        type=str,
        default=DEFAULT_EXTENSION,
        help=f"Extension of the source files to scan (default: {DEFAULT_EXTENSION})",
    )

    parser.add_argument(
        "--code-language",
        type=str,
        default=RenderOptions.code_language,
        help="Fence language for examples and type definitions (default: lua)",
    )

    # Output modes
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the updated README to stdout instead of writing it",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the README is not up to date; write nothing",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """
    Print a status message to stderr.

    Args:
        message: The message to print
        quiet: If True, suppress the message
    """
    if quiet:
        return
    print(f"[docsplice] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def run_pipeline(
    repo_path: Path,
    readme_path: Path,
    extension: str = DEFAULT_EXTENSION,
    options: Optional[RenderOptions] = None,
    dry_run: bool = False,
    check: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """
    Run the full docsplice pipeline.

    Args:
        repo_path: Root of the repository to scan
        readme_path: README whose marked regions are regenerated
        extension: Source file extension to scan
        options: Rendering options
        dry_run: If True, print the result instead of writing it
        check: If True, only compare the result with the README on disk
        verbose: If True, show detailed progress
        quiet: If True, suppress non-error output

    Returns:
        Exit code (0 = success, 1 = error or, with check, out of date)
    """
    try:
        # Step 1: File Discovery
        log("Discovering source files...", quiet=quiet)
        discovery_result = discover_files(repo_path, extension=extension)
        log_verbose(f"Found {discovery_result.total_file_count} {discovery_result.extension} files", verbose, quiet)
        for warning in discovery_result.warnings:
            log(f"Warning: {warning}", quiet=quiet)

        # Step 2: Block Extraction (validation happens per block)
        log("Extracting documentation blocks...", quiet=quiet)
        registry = create_default_registry()
        docs = sort_docs(registry.extract_all(discovery_result))

        for warning in registry.get_warnings():
            log(f"Warning: {warning}", quiet=quiet)

        if verbose and not quiet:
            for category in DocCategory:
                count = sum(1 for doc in docs if doc.category is category)
                log_verbose(f"{category.value}: {count}", verbose, quiet)

        # Step 3: Render & splice
        log(f"Updating {readme_path.name}...", quiet=quiet)
        # newline="" keeps CRLF endings as they are on disk
        with open(readme_path, "r", encoding="utf-8", newline="") as f:
            current = f.read()
        updated = update_readme(current, docs, DocRenderer(options))

        # Step 4: Output
        if dry_run:
            sys.stdout.write(updated)
            log("(Dry run - no file written)", quiet=quiet)
        elif check:
            if updated != current:
                print(f"Error: {readme_path} is out of date. Run docsplice to update it.", file=sys.stderr)
                return 1
            log(f"{readme_path} is up to date.", quiet=quiet)
        elif updated == current:
            log(f"{readme_path} already up to date.", quiet=quiet)
        else:
            with open(readme_path, "w", encoding="utf-8", newline="") as f:
                f.write(updated)
            log(f"README written to: {readme_path}", quiet=quiet)

    except DocspliceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {readme_path} is not valid UTF-8: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    repo_path = Path(args.path).resolve()

    readme_path = Path(args.readme)
    if not readme_path.is_absolute():
        readme_path = repo_path / readme_path

    render_options = RenderOptions(code_language=args.code_language)

    return run_pipeline(
        repo_path=repo_path,
        readme_path=readme_path,
        extension=args.extension,
        options=render_options,
        dry_run=args.dry_run,
        check=args.check,
        verbose=args.verbose,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
