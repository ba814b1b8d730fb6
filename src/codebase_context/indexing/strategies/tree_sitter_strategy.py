"""
Tree-driven symbol extraction shared by every tree-sitter language.

A language plugs in by declaring a TreeSitterGrammar table; the traversal
itself is the same for all of them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Mapping, Optional, Tuple

from tree_sitter import Node, Parser

from ..models import SymbolKind
from .base_strategy import ExtractionResult, ParsingStrategy, split_lines, truncate_statement

logger = logging.getLogger(__name__)

MAX_TRAVERSAL_DEPTH = 20


@dataclass(frozen=True)
class TreeSitterGrammar:
    """Node-type tables describing how one grammar maps onto symbols."""

    language: str
    symbol_kinds: Mapping[str, SymbolKind]
    containers: FrozenSet[str] = frozenset()
    wrappers: FrozenSet[str] = frozenset()
    namespaces: FrozenSet[str] = frozenset()
    import_types: FrozenSet[str] = frozenset()
    export_types: FrozenSet[str] = frozenset()
    declarator_types: FrozenSet[str] = frozenset()
    function_value_types: FrozenSet[str] = frozenset()
    object_value_types: FrozenSet[str] = frozenset()
    comment_types: FrozenSet[str] = frozenset({"comment"})
    name_fields: Tuple[str, ...] = ("name", "declarator")
    max_depth: int = MAX_TRAVERSAL_DEPTH

    def kind_for(self, node_type: str) -> Optional[SymbolKind]:
        return self.symbol_kinds.get(node_type)


@dataclass
class _Traversal:
    file_path: str
    source: bytes
    lines: list
    result: ExtractionResult


class TreeSitterStrategy(ParsingStrategy):
    """Pre-order traversal of a tree-sitter syntax tree into flat symbols."""

    grammar: TreeSitterGrammar

    def __init__(self, parser_factory: Callable[[], Optional[Parser]]):
        self._parser_factory = parser_factory

    def get_language_name(self) -> str:
        return self.grammar.language

    def parse_file(self, file_path: str, content: str) -> ExtractionResult:
        parser = self._parser_factory()
        if parser is None:
            raise RuntimeError(f"No tree-sitter parser available for {self.grammar.language}")

        source = content.encode("utf-8")
        tree = parser.parse(source)
        traversal = _Traversal(
            file_path=file_path,
            source=source,
            lines=split_lines(content),
            result=ExtractionResult(),
        )

        self._walk(tree.root_node, traversal, parent_name=None, depth=0)
        self._collect_statements(tree.root_node, traversal)

        return traversal.result

    # ----- traversal -----

    def _walk(self, node: Node, traversal: _Traversal, parent_name: Optional[str], depth: int) -> None:
        if depth > self.grammar.max_depth:
            return

        scope_parent = parent_name
        for child in node.children:
            node_type = child.type

            if node_type in self.grammar.namespaces:
                symbol = self._extract_symbol(child, traversal, scope_parent)
                if symbol is None:
                    continue
                body = child.child_by_field_name("body")
                if body is not None:
                    self._walk(body, traversal, symbol.name, depth + 1)
                else:
                    # File-scoped namespace: members may be nested or follow as siblings.
                    self._walk(child, traversal, symbol.name, depth + 1)
                    scope_parent = symbol.name

            elif self.grammar.kind_for(node_type) is not None:
                symbol = self._extract_symbol(child, traversal, scope_parent)
                if symbol is None:
                    continue
                body = self._container_body(child)
                if body is not None:
                    self._walk(body, traversal, symbol.name, depth + 1)

            elif node_type in self.grammar.wrappers:
                self._walk(child, traversal, scope_parent, depth + 1)

    def _container_body(self, node: Node) -> Optional[Node]:
        """Return the node whose children are members of ``node``, if it is a container."""
        if node.type in self.grammar.containers:
            return node.child_by_field_name("body")
        if node.type in self.grammar.declarator_types:
            value = node.child_by_field_name("value")
            if value is not None and value.type in self.grammar.object_value_types:
                return value
        return None

    def _extract_symbol(self, node: Node, traversal: _Traversal, parent_name: Optional[str]):
        name = self._extract_name(node, traversal)
        if not name:
            return None

        symbol = self._build_symbol(
            name=name,
            kind=self._resolve_kind(node),
            file_path=traversal.file_path,
            lines=traversal.lines,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            parent_name=parent_name,
            doc_comment=self._doc_comment(node, traversal),
        )
        traversal.result.symbols.append(symbol)
        return symbol

    def _resolve_kind(self, node: Node) -> SymbolKind:
        if node.type in self.grammar.declarator_types:
            value = node.child_by_field_name("value")
            if value is not None and value.type in self.grammar.function_value_types:
                return SymbolKind.FUNCTION
            return SymbolKind.VARIABLE
        return self.grammar.kind_for(node.type) or SymbolKind.UNKNOWN

    def _extract_name(self, node: Node, traversal: _Traversal) -> Optional[str]:
        for field_name in self.grammar.name_fields:
            name_node = node.child_by_field_name(field_name)
            if name_node is not None:
                return self._first_line(self._text(name_node, traversal))
        return None

    def _doc_comment(self, node: Node, traversal: _Traversal) -> Optional[str]:
        anchor = node
        previous = anchor.prev_named_sibling
        # Symbols wrapped in export/decorator nodes take the comment above the wrapper.
        while previous is None and anchor.parent is not None and anchor.parent.type in self.grammar.wrappers:
            anchor = anchor.parent
            previous = anchor.prev_named_sibling

        if previous is not None and previous.type in self.grammar.comment_types:
            return self._text(previous, traversal)
        return None

    # ----- imports / exports -----

    def _collect_statements(self, root: Node, traversal: _Traversal) -> None:
        for child in root.children:
            if child.type in self.grammar.import_types:
                traversal.result.imports.append(truncate_statement(self._text(child, traversal)))
            elif child.type in self.grammar.export_types:
                traversal.result.exports.append(truncate_statement(self._text(child, traversal)))

    # ----- helpers -----

    @staticmethod
    def _text(node: Node, traversal: _Traversal) -> str:
        return traversal.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _first_line(text: str) -> str:
        return text.strip().split("\n", 1)[0].strip()
