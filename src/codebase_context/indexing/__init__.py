"""
Code indexing: models, language detection, extraction and persistence.

The indexer itself lives in ``index_builder`` and is imported from there; it
depends on the directory walker, which in turn depends on ``languages``.
"""

from .cache import IndexCache
from .languages import get_language_for_file, get_parser
from .models import IndexedFile, ProjectIndex, Symbol, SymbolKind
from .store import IndexStore
from .tokenizer import document_text, tokenize

__all__ = [
    'IndexCache',
    'IndexStore',
    'IndexedFile',
    'ProjectIndex',
    'Symbol',
    'SymbolKind',
    'document_text',
    'get_language_for_file',
    'get_parser',
    'tokenize',
]
