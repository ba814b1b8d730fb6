"""
Index snapshot serialization.

msgpack is the preferred on-disk format; JSON is kept for readability and so
that snapshots written under one format stay loadable after switching to the
other. Writes are atomic: the payload goes to a temp file in the target
directory and is moved into place with os.replace.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional, Tuple

import msgpack

logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS = {
    "msgpack": ".msgpack",
    "json": ".json",
}


class IndexSerializer:
    """
    Unified save/load interface over the supported snapshot formats.

    Paths are passed without extension; the serializer appends the one that
    belongs to the format it writes or reads.
    """

    def __init__(self, index_format: str = "msgpack"):
        if index_format not in FORMAT_EXTENSIONS:
            raise ValueError(f"Unsupported index format: {index_format}")
        self.index_format = index_format

    @property
    def fallback_format(self) -> str:
        return "json" if self.index_format == "msgpack" else "msgpack"

    def path_for(self, base_path: str, index_format: Optional[str] = None) -> str:
        return base_path + FORMAT_EXTENSIONS[index_format or self.index_format]

    def save(self, data: Dict[str, Any], base_path: str) -> str:
        """Atomically write ``data``; returns the final path. OSError propagates."""
        target = self.path_for(base_path)
        payload = self._encode(data)

        directory = os.path.dirname(target) or "."
        os.makedirs(directory, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix=".tmp-", suffix=FORMAT_EXTENSIONS[self.index_format],
                                         dir=directory)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(temp_path, target)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
        return target

    def load(self, base_path: str) -> Optional[Dict[str, Any]]:
        """Load the snapshot, trying the configured format before the other one."""
        for index_format in (self.index_format, self.fallback_format):
            path = self.path_for(base_path, index_format)
            if not os.path.exists(path):
                continue
            data = self._load_file(path, index_format)
            if data is not None:
                return data
        return None

    def existing_paths(self, base_path: str) -> Tuple[str, ...]:
        return tuple(
            path
            for path in (self.path_for(base_path, fmt) for fmt in FORMAT_EXTENSIONS)
            if os.path.exists(path)
        )

    def _encode(self, data: Dict[str, Any]) -> bytes:
        if self.index_format == "msgpack":
            return msgpack.packb(data, use_bin_type=True)
        return json.dumps(data, ensure_ascii=False, indent=1).encode("utf-8")

    def _load_file(self, path: str, index_format: str) -> Optional[Dict[str, Any]]:
        try:
            with open(path, "rb") as handle:
                raw = handle.read()
            if index_format == "msgpack":
                data = msgpack.unpackb(raw, raw=False, strict_map_key=False)
            else:
                data = json.loads(raw.decode("utf-8"))
        except OSError as e:
            logger.warning(f"Could not read index snapshot {path}: {e}")
            return None
        except (ValueError, TypeError, msgpack.UnpackException) as e:
            logger.warning(f"Ignoring corrupt index snapshot {path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring index snapshot {path}: unexpected top-level type")
            return None
        return data
