"""Simplex Language Server package.

This package provides:
- A pygls-based Language Server for the Simplex language.
- A static indexer that parses documents for top-level definitions without evaluation.

Note: The LSP does not evaluate user buffers; it builds a static index from parsed text.
"""

__all__ = [
    "server",
    "indexer",
]
