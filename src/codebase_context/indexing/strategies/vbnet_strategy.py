"""
VB.NET parsing strategy using keyword-block scanning.
"""

import re

from ..models import SymbolKind
from .pattern_strategy import BlockConstruct, KeywordBlockStrategy

_MODIFIERS = (
    r"(?:(?:Public|Private|Protected|Friend|Shared|Static|Overrides|Overridable|Overloads|"
    r"MustOverride|MustInherit|NotInheritable|NotOverridable|Partial|ReadOnly|WriteOnly|"
    r"Shadows|Async|Iterator|Default|Widening|Narrowing|Custom|WithEvents)\s+)*"
)


def _construct(keyword: str, kind: SymbolKind, declaration: str, **options) -> BlockConstruct:
    pattern = re.compile(rf"^\s*{_MODIFIERS}{declaration}", re.IGNORECASE)
    return BlockConstruct(keyword=keyword, kind=kind, pattern=pattern, **options)


VBNET_CONSTRUCTS = (
    _construct("Namespace", SymbolKind.NAMESPACE, r"Namespace\s+(?P<name>[\w.]+)", container=True),
    _construct("Module", SymbolKind.CLASS, r"Module\s+(?P<name>\w+)", container=True),
    _construct("Class", SymbolKind.CLASS, r"Class\s+(?P<name>\w+)", container=True),
    _construct("Structure", SymbolKind.STRUCT, r"Structure\s+(?P<name>\w+)", container=True),
    _construct("Interface", SymbolKind.INTERFACE, r"Interface\s+(?P<name>\w+)", container=True),
    _construct("Enum", SymbolKind.ENUM, r"Enum\s+(?P<name>\w+)"),
    _construct("Sub", SymbolKind.CONSTRUCTOR, r"Sub\s+(?P<name>New)\b"),
    _construct("Sub", SymbolKind.METHOD, r"Sub\s+(?P<name>\w+)"),
    _construct("Function", SymbolKind.METHOD, r"Function\s+(?P<name>\w+)"),
    _construct("Property", SymbolKind.PROPERTY, r"Property\s+(?P<name>\w+)"),
    _construct("Event", SymbolKind.EVENT, r"Event\s+(?P<name>\w+)"),
    _construct("Delegate", SymbolKind.DELEGATE,
               r"Delegate\s+(?:Sub|Function)\s+(?P<name>\w+)", block=False),
)


class VbNetParsingStrategy(KeywordBlockStrategy):
    """VB.NET declarations found by keyword and closed by ``End <keyword>``."""

    language = "vbnet"
    constructs = VBNET_CONSTRUCTS
    comment_pattern = re.compile(r"^\s*(?:'|REM\b)", re.IGNORECASE)
    import_pattern = re.compile(r"^\s*Imports\s+\S", re.IGNORECASE)
    attribute_pattern = re.compile(r"^\s*<[^>]*>\s*(?:_\s*)?$")
    one_liner_pattern = re.compile(r"\b(?:MustOverride|Declare)\b", re.IGNORECASE)
    one_liner_parents = frozenset({"interface"})
    # A lambda header with nothing after its parameter list spans lines.
    inline_block_pattern = re.compile(
        r"(?<![\w.])(?P<keyword>Sub|Function)\s*\([^()]*\)(?:\s+As\s+[\w.()]+)?\s*$",
        re.IGNORECASE,
    )
