"""
JavaScript parsing strategy using tree-sitter.
"""

from types import MappingProxyType
from typing import Optional

from tree_sitter import Node

from ..models import SymbolKind
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy

FUNCTION_VALUE_TYPES = frozenset({
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
})

DESTRUCTURING_PATTERNS = frozenset({"object_pattern", "array_pattern"})

JAVASCRIPT_GRAMMAR = TreeSitterGrammar(
    language="javascript",
    symbol_kinds=MappingProxyType({
        "function_declaration": SymbolKind.FUNCTION,
        "generator_function_declaration": SymbolKind.FUNCTION,
        "class_declaration": SymbolKind.CLASS,
        "method_definition": SymbolKind.METHOD,
        "field_definition": SymbolKind.FIELD,
        "variable_declarator": SymbolKind.VARIABLE,
    }),
    containers=frozenset({"class_declaration"}),
    wrappers=frozenset({
        "program",
        "export_statement",
        "lexical_declaration",
        "variable_declaration",
    }),
    import_types=frozenset({"import_statement"}),
    export_types=frozenset({"export_statement"}),
    declarator_types=frozenset({"variable_declarator"}),
    function_value_types=FUNCTION_VALUE_TYPES,
    object_value_types=frozenset({"object"}),
    # field_definition names its member through the "property" field
    name_fields=("name", "property", "declarator"),
)


class JavaScriptParsingStrategy(TreeSitterStrategy):
    """JavaScript-specific parsing strategy using tree-sitter."""

    grammar = JAVASCRIPT_GRAMMAR

    def _extract_name(self, node: Node, traversal) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is not None and name_node.type in DESTRUCTURING_PATTERNS:
            return None
        return super()._extract_name(node, traversal)
