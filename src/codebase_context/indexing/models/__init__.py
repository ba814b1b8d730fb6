"""
Model classes for the indexing system.
"""

from .symbol_info import Symbol, SymbolKind
from .file_info import IndexedFile
from .project_index import ProjectIndex

__all__ = ['Symbol', 'SymbolKind', 'IndexedFile', 'ProjectIndex']
