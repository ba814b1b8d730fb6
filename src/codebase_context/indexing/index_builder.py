"""
Project Indexer - incremental file-to-symbol extraction.

Walks a project, reuses unchanged file records from the previous snapshot by
content hash, extracts the rest through the StrategyFactory, rebuilds the
vocabulary and persists the resulting ProjectIndex.
"""

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

import xxhash

from ..config import IndexerConfig, get_config
from ..utils.file_walker import FileEntry, FileWalker, validate_root
from .languages import get_language_for_file
from .models import IndexedFile, ProjectIndex
from .store import IndexStore
from .strategies import StrategyFactory
from .tokenizer import document_text, tokenize

logger = logging.getLogger(__name__)

PARSED = "parsed"
REUSED = "reused"
UNSUPPORTED = "unsupported"
UNREADABLE = "unreadable"
FAILED = "failed"


@dataclass
class IndexRunStats:
    """Diagnostics for one index_project run."""

    parsed: int = 0
    reused: int = 0
    skipped_unsupported: int = 0
    skipped_unreadable: int = 0
    failed: int = 0
    elapsed_seconds: float = 0.0

    def record(self, status: str) -> None:
        if status == PARSED:
            self.parsed += 1
        elif status == REUSED:
            self.reused += 1
        elif status == UNSUPPORTED:
            self.skipped_unsupported += 1
        elif status == UNREADABLE:
            self.skipped_unreadable += 1
        else:
            self.failed += 1

    def to_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["elapsed_seconds"] = round(self.elapsed_seconds, 3)
        return data


def content_hash(raw: bytes) -> str:
    return xxhash.xxh3_64(raw).hexdigest()


def build_vocabulary(files: Dict[str, IndexedFile]) -> Dict[str, int]:
    """Document frequency of every term over the synthetic documents, sorted by term."""
    frequencies: Counter = Counter()
    for file_path, indexed in files.items():
        frequencies.update(set(tokenize(document_text(file_path, indexed))))
    return {term: frequencies[term] for term in sorted(frequencies)}


class ProjectIndexer:
    """
    Builds ProjectIndex snapshots.

    Collaborators are injectable so tests can count extractions or point the
    store at a temporary directory.
    """

    def __init__(self, store: Optional[IndexStore] = None, config: Optional[IndexerConfig] = None,
                 strategy_factory: Optional[StrategyFactory] = None,
                 walker: Optional[FileWalker] = None):
        self.config = config or get_config()
        self.store = store or IndexStore(self.config.store_dir, self.config.index_format)
        self.strategy_factory = strategy_factory or StrategyFactory()
        self.walker = walker or FileWalker(
            max_files=self.config.max_files,
            max_file_size_bytes=self.config.get_max_file_size_bytes(),
        )
        self.last_stats: Optional[IndexRunStats] = None

    def index_project(self, root_dir: str, previous: Optional[ProjectIndex] = None,
                      parallel: Optional[bool] = None) -> ProjectIndex:
        """
        Index ``root_dir`` and persist the snapshot.

        Args:
            root_dir: Project root directory
            previous: Prior snapshot; loaded from the store when omitted
            parallel: Use a thread pool; defaults to the configured worker count

        Returns:
            The new ProjectIndex

        Raises:
            ProjectPathError: If the root is missing or not a directory
            IndexWriteError: If the snapshot cannot be persisted
        """
        start_time = time.time()
        root = validate_root(root_dir)
        entries = list(self.walker.walk(root))

        if previous is None:
            previous = self.store.load(root)
        prior_files = previous.files if previous is not None else {}

        use_pool = self.config.parallel if parallel is None else parallel
        logger.info(f"Indexing {len(entries)} files in {root} (parallel={use_pool})")
        results = self._process_entries(entries, prior_files, use_pool)

        stats = IndexRunStats()
        files: Dict[str, IndexedFile] = {}
        for relative_path, status, indexed in results:
            stats.record(status)
            if indexed is not None:
                files[relative_path] = indexed

        index = ProjectIndex.create(
            root_dir=root,
            indexed_at=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            files=files,
            vocabulary=build_vocabulary(files),
        )
        self.store.save(index)

        stats.elapsed_seconds = time.time() - start_time
        self.last_stats = stats
        logger.info(f"Indexed {index.file_count} files, {index.symbol_count} symbols in "
                    f"{stats.elapsed_seconds:.2f}s ({stats.parsed} parsed, {stats.reused} reused, "
                    f"{stats.failed} failed)")
        return index

    def _process_entries(self, entries: List[FileEntry], prior_files: Dict[str, IndexedFile],
                         parallel: bool) -> List[Tuple[str, str, Optional[IndexedFile]]]:
        def process(entry: FileEntry):
            return self._process_file(entry, prior_files.get(entry.relative_path))

        if parallel and len(entries) > 1:
            workers = min(self.config.max_workers or 4, len(entries))
            logger.debug(f"Using parallel processing with {workers} workers")
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order, which is walk order.
                return list(executor.map(process, entries))
        return [process(entry) for entry in entries]

    def _process_file(self, entry: FileEntry,
                      prior: Optional[IndexedFile]) -> Tuple[str, str, Optional[IndexedFile]]:
        relative_path = entry.relative_path

        language_config = get_language_for_file(relative_path)
        if language_config is None:
            logger.debug(f"Skipping {relative_path}: unsupported extension")
            return relative_path, UNSUPPORTED, None

        try:
            with open(entry.absolute_path, "rb") as handle:
                raw = handle.read()
        except OSError as e:
            logger.warning(f"Skipping unreadable file {relative_path}: {e}")
            return relative_path, UNREADABLE, None

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug(f"Skipping {relative_path}: not valid UTF-8")
            return relative_path, UNREADABLE, None

        file_hash = content_hash(raw)
        if prior is not None and prior.hash == file_hash:
            return relative_path, REUSED, prior

        strategy = self.strategy_factory.get_strategy(language_config.language)
        if strategy is None:
            logger.debug(f"Skipping {relative_path}: no strategy for {language_config.language}")
            return relative_path, UNSUPPORTED, None

        try:
            extraction = strategy.parse_file(relative_path, content)
        except Exception as e:
            logger.warning(f"Failed to extract symbols from {relative_path}: {e}")
            return relative_path, FAILED, None

        return relative_path, PARSED, IndexedFile(
            language=language_config.language,
            hash=file_hash,
            size_bytes=len(raw),
            symbols=extraction.symbols,
            imports=extraction.imports,
            exports=extraction.exports,
        )


def index_project(root_dir: str, previous: Optional[ProjectIndex] = None,
                  store: Optional[IndexStore] = None,
                  config: Optional[IndexerConfig] = None) -> ProjectIndex:
    """Module-level convenience wrapper around ProjectIndexer.index_project."""
    return ProjectIndexer(store=store, config=config).index_project(root_dir, previous=previous)
