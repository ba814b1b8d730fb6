"""
Configuration Management for Codebase Context MCP

Sensible defaults with optional environment variable overrides.
"""

import logging
import os
from typing import Optional

from .constants import DEFAULT_MAX_FILE_SIZE_KB, DEFAULT_MAX_FILES, DEFAULT_STORE_DIR

SUPPORTED_INDEX_FORMATS = ("msgpack", "json")


class IndexerConfig:
    """Indexer, walker and store configuration"""

    DEFAULT_MAX_FILES = DEFAULT_MAX_FILES
    DEFAULT_MAX_FILE_SIZE_KB = DEFAULT_MAX_FILE_SIZE_KB
    DEFAULT_STORE_DIR = DEFAULT_STORE_DIR
    DEFAULT_INDEX_FORMAT = "msgpack"
    DEFAULT_LOG_LEVEL = "ERROR"
    DEFAULT_MAX_WORKERS = 0  # 0 = sequential indexing

    def __init__(self):
        self.max_files = self._get_int_env("CODEBASE_CONTEXT_MAX_FILES", self.DEFAULT_MAX_FILES)
        self.max_file_size_kb = self._get_int_env(
            "CODEBASE_CONTEXT_MAX_FILE_SIZE_KB", self.DEFAULT_MAX_FILE_SIZE_KB
        )
        self.store_dir = os.path.expanduser(
            os.environ.get("CODEBASE_CONTEXT_STORE_DIR") or self.DEFAULT_STORE_DIR
        )
        self.index_format = (
            os.environ.get("CODEBASE_CONTEXT_INDEX_FORMAT") or self.DEFAULT_INDEX_FORMAT
        ).strip().lower()
        self.log_level = (
            os.environ.get("CODEBASE_CONTEXT_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL
        ).strip().upper()
        self.max_workers = self._get_int_env(
            "CODEBASE_CONTEXT_MAX_WORKERS", self.DEFAULT_MAX_WORKERS
        )

        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if self.max_files <= 0:
            raise ValueError("max_files must be positive")
        if self.max_file_size_kb <= 0:
            raise ValueError("max_file_size_kb must be positive")
        if self.max_workers < 0:
            raise ValueError("max_workers cannot be negative")
        if self.index_format not in SUPPORTED_INDEX_FORMATS:
            raise ValueError(
                f"index_format must be one of {', '.join(SUPPORTED_INDEX_FORMATS)}, "
                f"got {self.index_format!r}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def get_max_file_size_bytes(self) -> int:
        """Get max file size in bytes"""
        return self.max_file_size_kb * 1024

    def get_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @property
    def parallel(self) -> bool:
        return self.max_workers > 0

    def __repr__(self) -> str:
        return (
            f"IndexerConfig("
            f"max_files={self.max_files}, "
            f"max_file_size_kb={self.max_file_size_kb}, "
            f"store_dir={self.store_dir!r}, "
            f"index_format={self.index_format!r}, "
            f"log_level={self.log_level!r}, "
            f"max_workers={self.max_workers})"
        )


# Global configuration instance
_config: Optional[IndexerConfig] = None


def get_config() -> IndexerConfig:
    """Get global indexer configuration instance"""
    global _config
    if _config is None:
        _config = IndexerConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Codebase Context Configuration Environment Variables:

- CODEBASE_CONTEXT_MAX_FILES: Maximum number of files indexed per project (default: 20000)
- CODEBASE_CONTEXT_MAX_FILE_SIZE_KB: Files larger than this are never indexed (default: 512)
- CODEBASE_CONTEXT_STORE_DIR: Directory holding index snapshots (default: ~/.codebase-context-mcp)
- CODEBASE_CONTEXT_INDEX_FORMAT: Snapshot format, msgpack or json (default: msgpack)
- CODEBASE_CONTEXT_LOG_LEVEL: Server log level (default: ERROR)
- CODEBASE_CONTEXT_MAX_WORKERS: Worker threads for indexing, 0 = sequential (default: 0)

Example usage:
    export CODEBASE_CONTEXT_STORE_DIR=/tmp/codebase-context
    export CODEBASE_CONTEXT_INDEX_FORMAT=json
    export CODEBASE_CONTEXT_LOG_LEVEL=INFO
"""
