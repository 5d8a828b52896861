"""
docsplice - README generation from documentation blocks in Lua sources.

Scans a Neovim plugin's Lua files for `@doc` comment blocks, validates
them and rewrites the marked regions of README.md.
"""

__version__ = "0.1.0"
