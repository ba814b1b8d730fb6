"""
Ignore rules for the directory walker.

Default excludes and the project's root .gitignore are compiled into a single
gitignore-style PathSpec; hidden entries are always excluded.
"""

import logging
import os
from typing import Iterable, List, Optional

import pathspec

from ..constants import DEFAULT_IGNORE_PATTERNS

logger = logging.getLogger(__name__)


class FileFilter:
    """Decides which paths under a project root are visible to the indexer."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = list(DEFAULT_IGNORE_PATTERNS if patterns is None else patterns)
        self.spec = pathspec.PathSpec.from_lines("gitignore", self.patterns)

    @classmethod
    def for_project(cls, root_dir: str, additional_patterns: Optional[Iterable[str]] = None) -> "FileFilter":
        """Build a filter from the defaults plus ``root_dir/.gitignore``."""
        patterns = list(DEFAULT_IGNORE_PATTERNS)
        patterns.extend(load_gitignore(root_dir))
        if additional_patterns:
            patterns.extend(additional_patterns)
        return cls(patterns)

    @staticmethod
    def is_hidden(name: str) -> bool:
        return name.startswith(".")

    def should_exclude_directory(self, relative_path: str) -> bool:
        """``relative_path`` is posix-style and relative to the project root."""
        name = relative_path.rsplit("/", 1)[-1]
        if self.is_hidden(name):
            return True
        # Trailing slash so directory-only patterns ("build/") apply.
        return self.spec.match_file(relative_path + "/")

    def should_exclude_file(self, relative_path: str) -> bool:
        name = relative_path.rsplit("/", 1)[-1]
        if self.is_hidden(name):
            return True
        return self.spec.match_file(relative_path)


def load_gitignore(root_dir: str) -> List[str]:
    """Read the root .gitignore; an unreadable file contributes no patterns."""
    gitignore = os.path.join(root_dir, ".gitignore")
    if not os.path.isfile(gitignore):
        return []
    try:
        with open(gitignore, "r", encoding="utf-8") as handle:
            return handle.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {gitignore}: {e}")
        return []
