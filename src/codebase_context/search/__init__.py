"""
Search and retrieval over a built project index.
"""

from .outline import FileOutline, ProjectSummary, get_file_outline, get_project_summary
from .ranking import (
    CodeSearchResult,
    MatchedLine,
    SymbolSearchResult,
    search_code,
    search_symbols,
)

__all__ = [
    'CodeSearchResult',
    'FileOutline',
    'MatchedLine',
    'ProjectSummary',
    'SymbolSearchResult',
    'get_file_outline',
    'get_project_summary',
    'search_code',
    'search_symbols',
]
