"""
Codebase Context MCP

Local, file-backed code index with symbol extraction and ranked search.
"""

__version__ = "0.1.0"
