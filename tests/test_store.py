"""Snapshot store and serializer tests."""

import os

import pytest

from codebase_context.errors import IndexWriteError
from codebase_context.indexing.models import IndexedFile, ProjectIndex, Symbol, SymbolKind
from codebase_context.indexing.serialization import IndexSerializer
from codebase_context.indexing.store import IndexStore, root_key


def sample_index(root_dir):
    symbol = Symbol(
        name="Order",
        kind=SymbolKind.CLASS,
        file_path="Order.vb",
        start_line=1,
        end_line=3,
        signature="Public Class Order",
        doc_comment="''' An order.",
    )
    files = {"Order.vb": IndexedFile("vbnet", "ab" * 8, 42, symbols=[symbol], imports=["Imports System"])}
    return ProjectIndex.create(root_dir, "2026-01-01T00:00:00Z", files, {"order": 1, "system": 1})


@pytest.mark.unit
class TestIndexStore:
    """Per-root snapshot persistence."""

    def test_root_key_is_stable_sha256_prefix(self, empty_project):
        key = root_key(empty_project)
        assert len(key) == 16
        assert key == root_key(empty_project)
        assert key != root_key(empty_project + "-other")

    @pytest.mark.parametrize("index_format", ["msgpack", "json"])
    def test_save_and_load(self, store_dir, empty_project, index_format):
        store = IndexStore(store_dir, index_format)
        index = sample_index(empty_project)

        path = store.save(index)
        loaded = store.load(empty_project)

        assert path.endswith("." + index_format)
        assert os.path.dirname(os.path.dirname(path)) == store_dir
        assert loaded.to_dict() == index.to_dict()
        assert loaded.files["Order.vb"].symbols[0].kind is SymbolKind.CLASS

    def test_missing_snapshot_is_none(self, store_dir, empty_project):
        assert IndexStore(store_dir).load(empty_project) is None

    def test_corrupt_snapshot_is_none(self, store_dir, empty_project):
        store = IndexStore(store_dir, "json")
        path = store.index_path(empty_project)
        os.makedirs(os.path.dirname(path))
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("{not json")

        assert store.load(empty_project) is None

    def test_malformed_snapshot_is_none(self, store_dir, empty_project):
        serializer = IndexSerializer("json")
        store = IndexStore(store_dir, "json")
        serializer.save({"files": {}}, store.base_path(empty_project))

        assert store.load(empty_project) is None

    def test_format_switch_reads_other_format(self, store_dir, empty_project):
        IndexStore(store_dir, "json").save(sample_index(empty_project))
        loaded = IndexStore(store_dir, "msgpack").load(empty_project)
        assert loaded is not None
        assert loaded.file_count == 1

    def test_save_leaves_no_temp_files(self, store_dir, empty_project):
        store = IndexStore(store_dir)
        store.save(sample_index(empty_project))
        store.save(sample_index(empty_project))

        entries = os.listdir(os.path.dirname(store.index_path(empty_project)))
        assert entries == ["index.msgpack"]

    def test_write_failure_raises(self, store_dir, empty_project):
        blocker = os.path.join(store_dir, "blocked")
        with open(blocker, "w") as handle:
            handle.write("file where a directory is needed")
        store = IndexStore(blocker)

        with pytest.raises(IndexWriteError):
            store.save(sample_index(empty_project))

    def test_clear(self, store_dir, empty_project):
        store = IndexStore(store_dir)
        store.save(sample_index(empty_project))

        assert store.clear(empty_project) is True
        assert store.load(empty_project) is None
        assert store.clear(empty_project) is False


@pytest.mark.unit
def test_symbol_kind_parse_tolerates_unknown_values():
    assert SymbolKind.parse("method") is SymbolKind.METHOD
    assert SymbolKind.parse("module") is SymbolKind.UNKNOWN


@pytest.mark.unit
def test_project_index_counts_are_rederived():
    data = sample_index("/tmp/project").to_dict()
    data["file_count"] = 99
    data["symbol_count"] = 99

    restored = ProjectIndex.from_dict(data)

    assert restored.file_count == 1
    assert restored.symbol_count == 1
