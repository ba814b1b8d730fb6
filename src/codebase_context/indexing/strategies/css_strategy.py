"""
CSS parsing strategy using tree-sitter.

Rule sets are recorded as elements named by their selector list.
"""

from types import MappingProxyType
from typing import Optional

from tree_sitter import Node

from ..models import SymbolKind
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy

CSS_GRAMMAR = TreeSitterGrammar(
    language="css",
    symbol_kinds=MappingProxyType({
        "rule_set": SymbolKind.ELEMENT,
        "keyframes_statement": SymbolKind.ELEMENT,
    }),
    wrappers=frozenset({"stylesheet", "media_statement", "supports_statement", "block"}),
    import_types=frozenset({"import_statement"}),
)

_NAME_CHILD_TYPES = {
    "rule_set": "selectors",
    "keyframes_statement": "keyframes_name",
}


class CssParsingStrategy(TreeSitterStrategy):
    """CSS-specific parsing strategy using tree-sitter."""

    grammar = CSS_GRAMMAR

    def _extract_name(self, node: Node, traversal) -> Optional[str]:
        child_type = _NAME_CHILD_TYPES.get(node.type)
        for child in node.named_children:
            if child.type == child_type:
                name = self._first_line(self._text(child, traversal))
                if node.type == "keyframes_statement":
                    return f"@keyframes {name}"
                return name
        return None
