"""
Read-only projections over a ProjectIndex: file outline and project summary.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..constants import TOP_DIRECTORIES_LIMIT
from ..indexing.models import ProjectIndex, Symbol


@dataclass
class FileOutline:
    file_path: str
    language: str
    symbols: List[Symbol] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)


@dataclass
class DirectoryCount:
    directory: str
    file_count: int


@dataclass
class ProjectSummary:
    root_dir: str
    indexed_at: str
    file_count: int
    symbol_count: int
    languages: Dict[str, int] = field(default_factory=dict)
    top_directories: List[DirectoryCount] = field(default_factory=list)


def get_file_outline(index: ProjectIndex, file_path: str) -> Optional[FileOutline]:
    """Symbols of one file ordered by start line, or None if it is not indexed."""
    indexed = index.files.get(file_path.replace("\\", "/"))
    if indexed is None:
        return None
    return FileOutline(
        file_path=file_path,
        language=indexed.language,
        # Stable sort: symbols sharing a line keep extraction order.
        symbols=sorted(indexed.symbols, key=lambda symbol: symbol.start_line),
        imports=list(indexed.imports),
        exports=list(indexed.exports),
    )


def top_level_directory(file_path: str) -> str:
    head, sep, _ = file_path.partition("/")
    return head if sep else "."


def get_project_summary(index: ProjectIndex) -> ProjectSummary:
    languages: Counter = Counter()
    directories: Counter = Counter()
    for file_path, indexed in index.files.items():
        languages[indexed.language] += 1
        directories[top_level_directory(file_path)] += 1

    ranked = sorted(directories.items(), key=lambda item: (-item[1], item[0]))
    return ProjectSummary(
        root_dir=index.root_dir,
        indexed_at=index.indexed_at,
        file_count=index.file_count,
        symbol_count=index.symbol_count,
        languages=dict(sorted(languages.items())),
        top_directories=[DirectoryCount(name, count) for name, count in ranked[:TOP_DIRECTORIES_LIMIT]],
    )
