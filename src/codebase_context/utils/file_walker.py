"""
Deterministic directory walking for the indexer.

Entries come out in sorted order so that the same tree always yields the same
sequence, and the file-count cap always selects the same files.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from ..constants import (
    DEFAULT_MAX_FILE_SIZE_KB,
    DEFAULT_MAX_FILES,
    DIRECTORY_STRUCTURE_DEPTH,
    DIRECTORY_STRUCTURE_LIMIT,
)
from ..errors import ProjectPathError
from ..indexing.languages import get_language_for_file
from .file_filter import FileFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A candidate source file."""

    relative_path: str
    absolute_path: str
    size_bytes: int


def validate_root(root_dir: str) -> str:
    """Return the canonical absolute root or raise ProjectPathError."""
    if not root_dir or not root_dir.strip():
        raise ProjectPathError("Project path cannot be empty")
    canonical = os.path.realpath(os.path.abspath(os.path.expanduser(root_dir)))
    if not os.path.exists(canonical):
        raise ProjectPathError(f"Project path does not exist: {root_dir}")
    if not os.path.isdir(canonical):
        raise ProjectPathError(f"Project path is not a directory: {root_dir}")
    if not os.access(canonical, os.R_OK | os.X_OK):
        raise ProjectPathError(f"Project path is not accessible: {root_dir}")
    return canonical


class FileWalker:
    """Centralized file walking with integrated filtering and caps."""

    def __init__(self, max_files: int = DEFAULT_MAX_FILES,
                 max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_KB * 1024,
                 filter_factory: Callable[[str], FileFilter] = FileFilter.for_project,
                 is_supported: Optional[Callable[[str], bool]] = None):
        self.max_files = max_files
        self.max_file_size_bytes = max_file_size_bytes
        self.filter_factory = filter_factory
        self.is_supported = is_supported or (lambda path: get_language_for_file(path) is not None)

    def walk(self, root_dir: str) -> Iterator[FileEntry]:
        """
        Walk through all supported files under ``root_dir``.

        Args:
            root_dir: Project root; must be an existing directory

        Yields:
            FileEntry per indexable file, at most ``max_files`` of them

        Raises:
            ProjectPathError: If the root is missing or not a directory
        """
        root = validate_root(root_dir)
        file_filter = self.filter_factory(root)
        yielded = 0

        for relative_path, absolute_path in self._iter_files(root, file_filter):
            if not self.is_supported(relative_path):
                continue
            try:
                size = os.stat(absolute_path).st_size
            except OSError as e:
                logger.debug(f"Cannot stat {relative_path}: {e}")
                continue
            if size > self.max_file_size_bytes:
                logger.debug(f"Skipping {relative_path}: {size} bytes exceeds size cap")
                continue

            yield FileEntry(relative_path, absolute_path, size)
            yielded += 1
            if yielded >= self.max_files:
                logger.info(f"File cap of {self.max_files} reached in {root}")
                return

    @staticmethod
    def _iter_files(root: str, file_filter: FileFilter) -> Iterator[tuple]:
        for current, dirs, files in os.walk(root):
            relative_dir = os.path.relpath(current, root).replace(os.sep, "/")
            prefix = "" if relative_dir == "." else relative_dir + "/"

            # Filter and sort in place to control descent order.
            dirs[:] = sorted(d for d in dirs if not file_filter.should_exclude_directory(prefix + d))
            for name in sorted(files):
                relative_path = prefix + name
                if file_filter.should_exclude_file(relative_path):
                    continue
                absolute_path = os.path.join(current, name)
                if not os.path.isfile(absolute_path):
                    continue
                yield relative_path, absolute_path


def directory_structure(root_dir: str, max_depth: int = DIRECTORY_STRUCTURE_DEPTH,
                        limit: int = DIRECTORY_STRUCTURE_LIMIT) -> List[str]:
    """
    List the first ``max_depth`` levels below ``root_dir`` after ignore filtering.

    Directories carry a trailing slash. The result is sorted and capped.
    """
    root = validate_root(root_dir)
    file_filter = FileFilter.for_project(root)
    entries: List[str] = []

    for current, dirs, files in os.walk(root):
        relative_dir = os.path.relpath(current, root).replace(os.sep, "/")
        prefix = "" if relative_dir == "." else relative_dir + "/"
        depth = 0 if relative_dir == "." else relative_dir.count("/") + 1

        dirs[:] = sorted(d for d in dirs if not file_filter.should_exclude_directory(prefix + d))
        if depth + 1 > max_depth:
            dirs[:] = []
            continue
        entries.extend(prefix + d + "/" for d in dirs)
        entries.extend(prefix + f for f in files if not file_filter.should_exclude_file(prefix + f))

    return sorted(entries)[:limit]
