"""Tests for term normalization and synthetic documents."""

import pytest

from codebase_context.indexing.models import IndexedFile, Symbol, SymbolKind
from codebase_context.indexing.tokenizer import document_text, tokenize


@pytest.mark.unit
class TestTokenize:
    """tokenize() is shared by indexing and search."""

    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("parseConfig(path: string)") == ["parseconfig", "path", "string"]

    def test_keeps_underscore_and_dollar(self):
        assert tokenize("$scope my_var") == ["$scope", "my_var"]

    def test_drops_single_character_tokens(self):
        assert tokenize("a b cd e") == ["cd"]

    def test_empty_and_symbol_only_text(self):
        assert tokenize("") == []
        assert tokenize("() => {}") == []

    def test_deterministic(self):
        text = "export class UserManager { addUser(user: User) }"
        assert tokenize(text) == tokenize(text)


@pytest.mark.unit
def test_document_text_joins_path_symbols_imports_and_exports():
    symbol = Symbol(
        name="load",
        kind=SymbolKind.FUNCTION,
        file_path="src/io.py",
        start_line=3,
        end_line=4,
        signature="def load(path):",
        body_preview="def load(path):\n    return open(path)",
    )
    indexed = IndexedFile(
        language="python",
        hash="0" * 16,
        size_bytes=10,
        symbols=[symbol],
        imports=["import os"],
        exports=[],
    )

    text = document_text("src/io.py", indexed)

    assert text.startswith("src/io.py load def load(path):")
    assert text.endswith("import os")
    assert "return" in tokenize(text)
