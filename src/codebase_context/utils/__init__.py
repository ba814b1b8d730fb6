"""
Utility modules for the Codebase Context MCP server.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- response_formatter: Response formatting utilities
- file utilities: File filtering and walking
"""

from .error_handler import handle_mcp_errors, not_indexed_response
from .file_filter import FileFilter
from .file_walker import FileEntry, FileWalker, directory_structure, validate_root

__all__ = [
    'handle_mcp_errors',
    'not_indexed_response',
    'FileFilter',
    'FileEntry',
    'FileWalker',
    'directory_structure',
    'validate_root',
]
