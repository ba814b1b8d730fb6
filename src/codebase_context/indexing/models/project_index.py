"""
Whole-project index snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple

from .file_info import IndexedFile
from .symbol_info import Symbol


@dataclass
class ProjectIndex:
    """One snapshot per project root.

    ``file_count`` and ``symbol_count`` always mirror ``files``; build
    snapshots through :meth:`create` so the counts are derived, not passed.
    """

    root_dir: str
    indexed_at: str
    file_count: int
    symbol_count: int
    files: Dict[str, IndexedFile] = field(default_factory=dict)
    vocabulary: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def create(cls, root_dir: str, indexed_at: str, files: Dict[str, IndexedFile],
               vocabulary: Dict[str, int]) -> "ProjectIndex":
        return cls(
            root_dir=root_dir,
            indexed_at=indexed_at,
            file_count=len(files),
            symbol_count=sum(len(indexed.symbols) for indexed in files.values()),
            files=files,
            vocabulary=vocabulary,
        )

    def iter_symbols(self) -> Iterator[Tuple[str, Symbol]]:
        for file_path, indexed in self.files.items():
            for symbol in indexed.symbols:
                yield file_path, symbol

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_dir": self.root_dir,
            "indexed_at": self.indexed_at,
            "file_count": self.file_count,
            "symbol_count": self.symbol_count,
            "files": {path: indexed.to_dict() for path, indexed in self.files.items()},
            "vocabulary": dict(self.vocabulary),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectIndex":
        files = {
            path: IndexedFile.from_dict(item)
            for path, item in data.get("files", {}).items()
        }
        # Counts are re-derived so a hand-edited snapshot cannot break them.
        return cls.create(
            root_dir=data["root_dir"],
            indexed_at=data.get("indexed_at", ""),
            files=files,
            vocabulary={term: int(df) for term, df in data.get("vocabulary", {}).items()},
        )
