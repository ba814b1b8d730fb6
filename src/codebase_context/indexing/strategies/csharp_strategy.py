"""
C# parsing strategy using tree-sitter.
"""

from types import MappingProxyType
from typing import Optional

from tree_sitter import Node

from ..models import SymbolKind
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy

CSHARP_GRAMMAR = TreeSitterGrammar(
    language="csharp",
    symbol_kinds=MappingProxyType({
        "namespace_declaration": SymbolKind.NAMESPACE,
        "file_scoped_namespace_declaration": SymbolKind.NAMESPACE,
        "class_declaration": SymbolKind.CLASS,
        "record_declaration": SymbolKind.CLASS,
        "struct_declaration": SymbolKind.STRUCT,
        "interface_declaration": SymbolKind.INTERFACE,
        "enum_declaration": SymbolKind.ENUM,
        "method_declaration": SymbolKind.METHOD,
        "constructor_declaration": SymbolKind.CONSTRUCTOR,
        "property_declaration": SymbolKind.PROPERTY,
        "field_declaration": SymbolKind.FIELD,
        "event_field_declaration": SymbolKind.EVENT,
        "event_declaration": SymbolKind.EVENT,
        "delegate_declaration": SymbolKind.DELEGATE,
    }),
    containers=frozenset({
        "class_declaration",
        "record_declaration",
        "struct_declaration",
        "interface_declaration",
    }),
    wrappers=frozenset({"compilation_unit", "declaration_list"}),
    namespaces=frozenset({"namespace_declaration", "file_scoped_namespace_declaration"}),
    import_types=frozenset({"using_directive"}),
)

# field and event-field declarations keep their names on nested declarators
_DECLARATION_WRAPPERS = frozenset({"field_declaration", "event_field_declaration"})


class CSharpParsingStrategy(TreeSitterStrategy):
    """C#-specific parsing strategy using tree-sitter."""

    grammar = CSHARP_GRAMMAR

    def _extract_name(self, node: Node, traversal) -> Optional[str]:
        if node.type in _DECLARATION_WRAPPERS:
            return self._declarator_name(node, traversal)
        return super()._extract_name(node, traversal)

    def _declarator_name(self, node: Node, traversal) -> Optional[str]:
        for child in node.named_children:
            if child.type != "variable_declaration":
                continue
            for declarator in child.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is None:
                    name_node = next(
                        (item for item in declarator.named_children if item.type == "identifier"),
                        None,
                    )
                if name_node is not None:
                    return self._first_line(self._text(name_node, traversal))
        return None
