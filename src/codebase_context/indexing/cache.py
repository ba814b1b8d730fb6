"""
In-process cache of loaded project indexes.
"""

import threading
from typing import Dict, Optional

from .models import ProjectIndex


class IndexCache:
    """At most one live ProjectIndex per root, replaced whole on re-index."""

    def __init__(self):
        self._indexes: Dict[str, ProjectIndex] = {}
        self._lock = threading.RLock()

    def get(self, root_dir: str) -> Optional[ProjectIndex]:
        with self._lock:
            return self._indexes.get(root_dir)

    def put(self, index: ProjectIndex) -> None:
        with self._lock:
            self._indexes[index.root_dir] = index

    def invalidate(self, root_dir: str) -> bool:
        with self._lock:
            return self._indexes.pop(root_dir, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._indexes.clear()

    def __contains__(self, root_dir: str) -> bool:
        with self._lock:
            return root_dir in self._indexes

    def __len__(self) -> int:
        with self._lock:
            return len(self._indexes)
