"""
JSON parsing strategy using tree-sitter.

Object keys become property symbols; nested objects are followed to a fixed
depth so configuration files such as package.json or tsconfig.json outline
their top-level sections without flooding the index.
"""

from types import MappingProxyType
from typing import Optional

from tree_sitter import Node

from ..models import SymbolKind
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy

JSON_GRAMMAR = TreeSitterGrammar(
    language="json",
    symbol_kinds=MappingProxyType({"pair": SymbolKind.PROPERTY}),
    wrappers=frozenset({"document", "object"}),
    object_value_types=frozenset({"object"}),
    comment_types=frozenset(),
    max_depth=2,
)


class JsonParsingStrategy(TreeSitterStrategy):
    """JSON-specific parsing strategy using tree-sitter."""

    grammar = JSON_GRAMMAR

    def _extract_name(self, node: Node, traversal) -> Optional[str]:
        key = node.child_by_field_name("key")
        if key is None:
            return None
        return self._first_line(self._text(key, traversal)).strip("\"'") or None

    def _container_body(self, node: Node) -> Optional[Node]:
        value = node.child_by_field_name("value")
        if value is not None and value.type in self.grammar.object_value_types:
            return value
        return None
