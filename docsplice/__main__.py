"""
Entry point for running docsplice as a module.

Usage:
    python -m docsplice [path] [options]
"""

import sys

from docsplice.cli import main

if __name__ == "__main__":
    sys.exit(main())
