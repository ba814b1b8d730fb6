"""
Persistent index store: one snapshot per project root.
"""

import hashlib
import logging
import os
from typing import Optional

from ..constants import DEFAULT_STORE_DIR, INDEX_FILE_STEM, ROOT_KEY_LENGTH
from ..errors import IndexWriteError
from .models import ProjectIndex
from .serialization import IndexSerializer

logger = logging.getLogger(__name__)


def root_key(root_dir: str) -> str:
    """Stable store key for a project root."""
    absolute = os.path.abspath(root_dir)
    return hashlib.sha256(absolute.encode("utf-8")).hexdigest()[:ROOT_KEY_LENGTH]


class IndexStore:
    """Reads and writes ProjectIndex snapshots under a store directory."""

    def __init__(self, store_dir: str = DEFAULT_STORE_DIR, index_format: str = "msgpack"):
        self.store_dir = store_dir
        self.serializer = IndexSerializer(index_format)

    def base_path(self, root_dir: str) -> str:
        return os.path.join(self.store_dir, root_key(root_dir), INDEX_FILE_STEM)

    def index_path(self, root_dir: str) -> str:
        return self.serializer.path_for(self.base_path(root_dir))

    def load(self, root_dir: str) -> Optional[ProjectIndex]:
        """Load the snapshot for ``root_dir``; missing or corrupt snapshots read as None."""
        data = self.serializer.load(self.base_path(root_dir))
        if data is None:
            logger.debug(f"No stored index for {root_dir}")
            return None

        try:
            index = ProjectIndex.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Stored index for {root_dir} is malformed, ignoring it: {e}")
            return None

        if os.path.abspath(index.root_dir) != os.path.abspath(root_dir):
            logger.warning(f"Stored index under {self.base_path(root_dir)} belongs to "
                           f"{index.root_dir}, ignoring it")
            return None
        return index

    def save(self, index: ProjectIndex) -> str:
        """Persist ``index`` atomically and return the snapshot path."""
        try:
            path = self.serializer.save(index.to_dict(), self.base_path(index.root_dir))
        except OSError as e:
            raise IndexWriteError(f"Failed to write index for {index.root_dir}: {e}") from e
        logger.debug(f"Saved index for {index.root_dir} to {path}")
        return path

    def clear(self, root_dir: str) -> bool:
        """Delete every stored snapshot for ``root_dir``; returns True if any existed."""
        removed = False
        for path in self.serializer.existing_paths(self.base_path(root_dir)):
            os.remove(path)
            removed = True
        return removed
