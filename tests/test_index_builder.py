"""Tests for the incremental project indexer.

The sample project uses only VB.NET and XAML, which are handled by pattern
strategies, so these tests run without any tree-sitter grammar installed.
"""

import os

import pytest

from codebase_context.errors import IndexWriteError, ProjectPathError
from codebase_context.indexing.index_builder import ProjectIndexer, build_vocabulary, index_project
from codebase_context.indexing.strategies import ParsingStrategy, StrategyFactory
from codebase_context.indexing.tokenizer import document_text, tokenize

from conftest import write_files


class CountingStrategy(ParsingStrategy):
    """Delegates to a real strategy and records every extraction."""

    def __init__(self, inner, calls):
        self.inner = inner
        self.calls = calls

    def get_language_name(self):
        return self.inner.get_language_name()

    def parse_file(self, file_path, content):
        self.calls.append(file_path)
        return self.inner.parse_file(file_path, content)


class CountingFactory(StrategyFactory):
    def __init__(self):
        super().__init__()
        self.calls = []

    def get_strategy(self, language):
        strategy = super().get_strategy(language)
        return CountingStrategy(strategy, self.calls) if strategy else None


class ExplodingFactory(StrategyFactory):
    """Fails extraction for one language only."""

    def __init__(self, failing_language):
        super().__init__()
        self.failing_language = failing_language

    def get_strategy(self, language):
        strategy = super().get_strategy(language)
        if language != self.failing_language:
            return strategy

        class Exploding(CountingStrategy):
            def parse_file(self, file_path, content):
                raise RuntimeError("boom")

        return Exploding(strategy, [])


def snapshot_without_timestamp(index):
    data = index.to_dict()
    data.pop("indexed_at")
    return data


@pytest.mark.integration
class TestProjectIndexer:
    """End-to-end behaviour of ProjectIndexer.index_project."""

    def test_counts_match_contents(self, pattern_project, indexer_config, index_store):
        index = ProjectIndexer(store=index_store, config=indexer_config).index_project(str(pattern_project))

        assert index.root_dir == os.path.realpath(str(pattern_project))
        assert sorted(index.files) == ["App/MainWindow.xaml", "App/Orders.vb"]
        assert index.file_count == len(index.files)
        assert index.symbol_count == sum(len(f.symbols) for f in index.files.values())
        assert index.files["App/Orders.vb"].language == "vbnet"
        assert len(index.files["App/Orders.vb"].hash) == 16

    def test_snapshot_is_persisted(self, pattern_project, indexer_config, index_store):
        index = ProjectIndexer(store=index_store, config=indexer_config).index_project(str(pattern_project))

        loaded = index_store.load(index.root_dir)
        assert loaded is not None
        assert loaded.to_dict() == index.to_dict()

    def test_idempotent_on_unchanged_tree(self, pattern_project, indexer_config, index_store):
        indexer = ProjectIndexer(store=index_store, config=indexer_config)
        first = indexer.index_project(str(pattern_project))
        second = indexer.index_project(str(pattern_project))

        assert snapshot_without_timestamp(first) == snapshot_without_timestamp(second)
        assert indexer.last_stats.reused == 2
        assert indexer.last_stats.parsed == 0

    def test_only_changed_file_is_reextracted(self, pattern_project, indexer_config, index_store):
        factory = CountingFactory()
        indexer = ProjectIndexer(store=index_store, config=indexer_config, strategy_factory=factory)
        first = indexer.index_project(str(pattern_project))
        assert sorted(factory.calls) == ["App/MainWindow.xaml", "App/Orders.vb"]

        factory.calls.clear()
        vb_file = pattern_project / "App" / "Orders.vb"
        vb_file.write_text(vb_file.read_text() + "\nPublic Module Extra\nEnd Module\n")
        second = indexer.index_project(str(pattern_project), previous=first)

        assert factory.calls == ["App/Orders.vb"]
        assert second.files["App/MainWindow.xaml"] is first.files["App/MainWindow.xaml"]
        assert second.files["App/Orders.vb"] is not first.files["App/Orders.vb"]
        assert "Extra" in {s.name for s in second.files["App/Orders.vb"].symbols}
        assert indexer.last_stats.parsed == 1
        assert indexer.last_stats.reused == 1

    def test_previous_snapshot_loaded_from_store(self, pattern_project, indexer_config, index_store):
        ProjectIndexer(store=index_store, config=indexer_config).index_project(str(pattern_project))

        factory = CountingFactory()
        indexer = ProjectIndexer(store=index_store, config=indexer_config, strategy_factory=factory)
        indexer.index_project(str(pattern_project))

        assert factory.calls == []

    def test_vocabulary_is_rebuilt(self, pattern_project, indexer_config, index_store):
        indexer = ProjectIndexer(store=index_store, config=indexer_config)
        first = indexer.index_project(str(pattern_project))
        assert "layoutroot" in first.vocabulary
        assert list(first.vocabulary) == sorted(first.vocabulary)

        os.remove(pattern_project / "App" / "MainWindow.xaml")
        second = indexer.index_project(str(pattern_project), previous=first)

        assert "layoutroot" not in second.vocabulary
        documents = [set(tokenize(document_text(p, f))) for p, f in second.files.items()]
        for term, doc_freq in second.vocabulary.items():
            assert doc_freq == sum(1 for terms in documents if term in terms) >= 1

    def test_binary_and_unsupported_files_are_skipped(self, pattern_project, indexer_config, index_store):
        (pattern_project / "App" / "Broken.vb").write_bytes(b"Class X\n\xff\xfe\x00 End Class\n")
        write_files(pattern_project, {"docs/readme.txt": "plain text\n"})

        indexer = ProjectIndexer(store=index_store, config=indexer_config)
        index = indexer.index_project(str(pattern_project))

        assert "App/Broken.vb" not in index.files
        assert "docs/readme.txt" not in index.files
        assert indexer.last_stats.skipped_unreadable == 1

    def test_failed_extraction_does_not_abort(self, pattern_project, indexer_config, index_store):
        indexer = ProjectIndexer(store=index_store, config=indexer_config,
                                 strategy_factory=ExplodingFactory("xaml"))
        index = indexer.index_project(str(pattern_project))

        assert list(index.files) == ["App/Orders.vb"]
        assert indexer.last_stats.failed == 1

    def test_parallel_matches_sequential(self, pattern_project, indexer_config, index_store):
        write_files(pattern_project, {
            f"More/Module{i}.vb": f"Module Module{i}\n    Sub Run{i}()\n    End Sub\nEnd Module\n"
            for i in range(6)
        })
        indexer = ProjectIndexer(store=index_store, config=indexer_config)

        sequential = indexer.index_project(str(pattern_project), previous=None, parallel=False)
        index_store.clear(sequential.root_dir)
        parallel = ProjectIndexer(store=index_store, config=indexer_config).index_project(
            str(pattern_project), parallel=True
        )

        assert snapshot_without_timestamp(sequential) == snapshot_without_timestamp(parallel)
        assert list(parallel.files) == list(sequential.files)

    def test_missing_root_is_fatal(self, project_dir, indexer_config, index_store):
        with pytest.raises(ProjectPathError):
            ProjectIndexer(store=index_store, config=indexer_config).index_project(
                str(project_dir / "nope")
            )

    def test_write_failure_is_fatal(self, pattern_project, indexer_config, index_store, monkeypatch):
        def fail(*args, **kwargs):
            raise PermissionError("read-only store")

        monkeypatch.setattr(index_store.serializer, "save", fail)
        with pytest.raises(IndexWriteError):
            ProjectIndexer(store=index_store, config=indexer_config).index_project(str(pattern_project))

    def test_empty_project(self, empty_project, indexer_config, index_store):
        index = ProjectIndexer(store=index_store, config=indexer_config).index_project(empty_project)

        assert index.file_count == 0
        assert index.symbol_count == 0
        assert index.vocabulary == {}

    def test_module_level_index_project(self, pattern_project, indexer_config, index_store):
        index = index_project(str(pattern_project), store=index_store, config=indexer_config)
        assert index.file_count == 2


@pytest.mark.unit
def test_build_vocabulary_counts_documents_not_occurrences():
    from codebase_context.indexing.models import IndexedFile

    files = {
        "a/order.vb": IndexedFile("vbnet", "0" * 16, 1, imports=["Imports Orders Orders"]),
        "b/order.vb": IndexedFile("vbnet", "1" * 16, 1),
    }
    vocabulary = build_vocabulary(files)

    assert vocabulary["orders"] == 1
    assert vocabulary["order"] == 2
    assert vocabulary["vb"] == 2
