"""
Python parsing strategy using tree-sitter.
"""

from types import MappingProxyType

from ..models import SymbolKind
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy

PYTHON_GRAMMAR = TreeSitterGrammar(
    language="python",
    symbol_kinds=MappingProxyType({
        "function_definition": SymbolKind.FUNCTION,
        "class_definition": SymbolKind.CLASS,
    }),
    containers=frozenset({"class_definition"}),
    wrappers=frozenset({"decorated_definition", "module"}),
    import_types=frozenset({"import_statement", "import_from_statement", "future_import_statement"}),
)


class PythonParsingStrategy(TreeSitterStrategy):
    """Python-specific parsing strategy using tree-sitter."""

    grammar = PYTHON_GRAMMAR
