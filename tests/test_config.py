"""Tests for environment-driven configuration."""

import logging

import pytest

from codebase_context.config import IndexerConfig, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("MAX_FILES", "MAX_FILE_SIZE_KB", "STORE_DIR", "INDEX_FORMAT", "LOG_LEVEL", "MAX_WORKERS"):
        monkeypatch.delenv(f"CODEBASE_CONTEXT_{key}", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.mark.unit
class TestIndexerConfig:
    """IndexerConfig defaults, overrides and validation."""

    def test_defaults(self):
        config = IndexerConfig()

        assert config.max_files == 20000
        assert config.max_file_size_kb == 512
        assert config.get_max_file_size_bytes() == 512 * 1024
        assert config.store_dir.endswith(".codebase-context-mcp")
        assert config.index_format == "msgpack"
        assert config.get_log_level() == logging.ERROR
        assert config.parallel is False

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CODEBASE_CONTEXT_MAX_FILES", "50")
        monkeypatch.setenv("CODEBASE_CONTEXT_STORE_DIR", str(tmp_path))
        monkeypatch.setenv("CODEBASE_CONTEXT_INDEX_FORMAT", "JSON")
        monkeypatch.setenv("CODEBASE_CONTEXT_LOG_LEVEL", "debug")
        monkeypatch.setenv("CODEBASE_CONTEXT_MAX_WORKERS", "3")

        config = IndexerConfig()

        assert config.max_files == 50
        assert config.store_dir == str(tmp_path)
        assert config.index_format == "json"
        assert config.get_log_level() == logging.DEBUG
        assert config.parallel is True

    def test_invalid_integer_falls_back(self, monkeypatch):
        monkeypatch.setenv("CODEBASE_CONTEXT_MAX_FILES", "lots")
        assert IndexerConfig().max_files == 20000

    @pytest.mark.parametrize("key, value", [
        ("CODEBASE_CONTEXT_MAX_FILES", "0"),
        ("CODEBASE_CONTEXT_MAX_FILE_SIZE_KB", "-1"),
        ("CODEBASE_CONTEXT_MAX_WORKERS", "-2"),
        ("CODEBASE_CONTEXT_INDEX_FORMAT", "xml"),
        ("CODEBASE_CONTEXT_LOG_LEVEL", "LOUD"),
    ])
    def test_out_of_range_values_raise(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            IndexerConfig()

    def test_global_instance(self):
        assert get_config() is get_config()
        first = get_config()
        reset_config()
        assert get_config() is not first
