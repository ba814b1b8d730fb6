"""
TypeScript and TSX parsing strategies using tree-sitter.

Both dialects share one node table; they differ only in the grammar the
parser is built from.
"""

from dataclasses import replace
from types import MappingProxyType

from ..models import SymbolKind
from .javascript_strategy import FUNCTION_VALUE_TYPES, JavaScriptParsingStrategy
from .tree_sitter_strategy import TreeSitterGrammar

TYPESCRIPT_GRAMMAR = TreeSitterGrammar(
    language="typescript",
    symbol_kinds=MappingProxyType({
        "function_declaration": SymbolKind.FUNCTION,
        "generator_function_declaration": SymbolKind.FUNCTION,
        "function_signature": SymbolKind.FUNCTION,
        "class_declaration": SymbolKind.CLASS,
        "abstract_class_declaration": SymbolKind.CLASS,
        "method_definition": SymbolKind.METHOD,
        "method_signature": SymbolKind.METHOD,
        "abstract_method_signature": SymbolKind.METHOD,
        "public_field_definition": SymbolKind.FIELD,
        "property_signature": SymbolKind.PROPERTY,
        "interface_declaration": SymbolKind.INTERFACE,
        "type_alias_declaration": SymbolKind.TYPE,
        "enum_declaration": SymbolKind.ENUM,
        "internal_module": SymbolKind.NAMESPACE,
        "module": SymbolKind.NAMESPACE,
        "variable_declarator": SymbolKind.VARIABLE,
    }),
    containers=frozenset({
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
    }),
    wrappers=frozenset({
        "program",
        "export_statement",
        "lexical_declaration",
        "variable_declaration",
        "ambient_declaration",
        "expression_statement",
    }),
    namespaces=frozenset({"internal_module", "module"}),
    import_types=frozenset({"import_statement"}),
    export_types=frozenset({"export_statement"}),
    declarator_types=frozenset({"variable_declarator"}),
    function_value_types=FUNCTION_VALUE_TYPES,
    object_value_types=frozenset({"object"}),
)

TSX_GRAMMAR = replace(TYPESCRIPT_GRAMMAR, language="tsx")


class TypeScriptParsingStrategy(JavaScriptParsingStrategy):
    """TypeScript-specific parsing strategy using tree-sitter."""

    grammar = TYPESCRIPT_GRAMMAR

    def _extract_name(self, node, traversal):
        name = super()._extract_name(node, traversal)
        if name and node.type == "module":
            # declare module "pkg" { ... }
            name = name.strip("'\"")
        return name


class TsxParsingStrategy(TypeScriptParsingStrategy):
    """TSX uses the TypeScript node table with the tsx grammar."""

    grammar = TSX_GRAMMAR
