"""
Index service for the Codebase Context MCP server.

This service wires the store, the in-process cache and the indexer together
and exposes the engine operations the MCP tools call.
"""

import logging
from typing import List, Optional

from ..config import IndexerConfig, get_config
from ..constants import DIRECTORY_STRUCTURE_LIMIT
from ..errors import NotIndexedError
from ..indexing.cache import IndexCache
from ..indexing.index_builder import IndexRunStats, ProjectIndexer
from ..indexing.models import ProjectIndex, SymbolKind
from ..indexing.store import IndexStore
from ..search import (
    CodeSearchResult,
    FileOutline,
    ProjectSummary,
    SymbolSearchResult,
    get_file_outline,
    get_project_summary,
    search_code,
    search_symbols,
)
from ..utils.file_walker import directory_structure, validate_root

logger = logging.getLogger(__name__)


class CodebaseContextService:
    """
    Service for indexing projects and answering queries against them.

    Queries resolve the index from the cache first, then from the store; a
    snapshot loaded from the store is cached for later calls.
    """

    def __init__(self, config: Optional[IndexerConfig] = None, store: Optional[IndexStore] = None,
                 cache: Optional[IndexCache] = None, indexer: Optional[ProjectIndexer] = None):
        self.config = config or get_config()
        self.store = store or IndexStore(self.config.store_dir, self.config.index_format)
        self.cache = cache or IndexCache()
        self.indexer = indexer or ProjectIndexer(store=self.store, config=self.config)

    def index(self, directory: str) -> ProjectIndex:
        """Re-index ``directory`` incrementally and replace the cached copy."""
        root = validate_root(directory)
        previous = self.cache.get(root)
        index = self.indexer.index_project(root, previous=previous)
        self.cache.put(index)
        return index

    @property
    def last_stats(self) -> Optional[IndexRunStats]:
        return self.indexer.last_stats

    def get_index(self, directory: str) -> Optional[ProjectIndex]:
        """Cached or stored index for ``directory``; None when never indexed."""
        root = validate_root(directory)
        index = self.cache.get(root)
        if index is not None:
            return index

        index = self.store.load(root)
        if index is not None:
            logger.debug(f"Loaded stored index for {root}")
            self.cache.put(index)
        return index

    def require_index(self, directory: str) -> ProjectIndex:
        index = self.get_index(directory)
        if index is None:
            raise NotIndexedError(directory)
        return index

    def search_code(self, directory: str, query: str, max_results: int = 15) -> List[CodeSearchResult]:
        return search_code(self.require_index(directory), query, max_results=max_results)

    def search_symbols(self, directory: str, query: str, kind: Optional[str] = None,
                       max_results: int = 20) -> List[SymbolSearchResult]:
        symbol_kind = None
        if kind:
            try:
                symbol_kind = SymbolKind(kind.strip().lower())
            except ValueError as e:
                valid = ", ".join(item.value for item in SymbolKind)
                raise ValueError(f"Unknown symbol kind {kind!r}; expected one of: {valid}") from e
        return search_symbols(self.require_index(directory), query, kind=symbol_kind,
                              max_results=max_results)

    def get_file_outline(self, directory: str, file_path: str) -> Optional[FileOutline]:
        return get_file_outline(self.require_index(directory), file_path)

    def get_project_summary(self, directory: str) -> ProjectSummary:
        return get_project_summary(self.require_index(directory))

    def get_directory_structure(self, directory: str) -> List[str]:
        return directory_structure(directory, limit=DIRECTORY_STRUCTURE_LIMIT)
