"""
Markup strategy for XAML documents.

Tags are scanned over the whole text so attributes may span lines; offsets are
mapped back to 1-based lines with a bisect over line start offsets. Only the
shallow part of the element tree is recorded, since deep layout nodes carry
little navigational value.
"""

import bisect
import re
from typing import List, Optional

from ..models import SymbolKind
from .base_strategy import ExtractionResult, ParsingStrategy, split_lines, truncate_statement

MAX_ELEMENT_DEPTH = 3

_TAG_RE = re.compile(
    r"<(?P<closing>/)?(?P<tag>[A-Za-z_][\w.:-]*)(?P<attrs>(?:\"[^\"]*\"|'[^']*'|[^'\">])*?)(?P<self_closing>/)?>"
)
_IGNORED_MARKUP_RE = re.compile(r"<!--.*?-->|<\?.*?\?>|<!\[CDATA\[.*?\]\]>|<!DOCTYPE[^>]*>", re.DOTALL)
_XMLNS_RE = re.compile(r"(?<![\w:.])xmlns(?::[\w.-]+)?\s*=\s*(?:\"[^\"]*\"|'[^']*')")
_NAME_ATTRIBUTES = ("x:Name", "Name", "x:Key", "x:Class")


def _mask(match) -> str:
    # Keep offsets and newlines so line numbers stay valid.
    return re.sub(r"[^\n]", " ", match.group(0))


def _attribute_value(attrs: str, attribute: str) -> Optional[str]:
    pattern = rf"(?<![\w:.]){re.escape(attribute)}\s*=\s*(?:\"([^\"]*)\"|'([^']*)')"
    match = re.search(pattern, attrs)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


class MarkupParsingStrategy(ParsingStrategy):
    """Records shallow XAML elements as ``Tag[name]`` symbols."""

    def __init__(self, language: str = "xaml", max_depth: int = MAX_ELEMENT_DEPTH):
        self._language = language
        self._max_depth = max_depth

    def get_language_name(self) -> str:
        return self._language

    def parse_file(self, file_path: str, content: str) -> ExtractionResult:
        result = ExtractionResult()
        lines = split_lines(content)
        text = _IGNORED_MARKUP_RE.sub(_mask, content)
        line_starts = [0]
        for position, char in enumerate(text):
            if char == "\n":
                line_starts.append(position + 1)

        def line_of(offset: int) -> int:
            return bisect.bisect_right(line_starts, offset)

        # (tag, recorded symbol name or None)
        stack: List[tuple] = []
        for match in _TAG_RE.finditer(text):
            tag = match.group("tag")
            if match.group("closing"):
                self._pop(stack, tag)
                continue

            attrs = match.group("attrs") or ""
            self._collect_namespaces(attrs, result)

            depth = len(stack) + 1
            self_closing = bool(match.group("self_closing"))
            symbol_name = None
            if depth <= self._max_depth:
                symbol_name = self._element_name(tag, attrs)
                start_line = line_of(match.start())
                if self_closing:
                    end_line = line_of(match.end() - 1)
                else:
                    end_line = self._find_closing_line(text, tag, match.end(), line_of)
                parent_name = next((name for _, name in reversed(stack) if name), None)
                result.symbols.append(self._build_symbol(
                    name=symbol_name,
                    kind=SymbolKind.ELEMENT,
                    file_path=file_path,
                    lines=lines,
                    start_line=start_line,
                    end_line=end_line,
                    parent_name=parent_name,
                ))

            if not self_closing:
                stack.append((tag, symbol_name))

        return result

    @staticmethod
    def _element_name(tag: str, attrs: str) -> str:
        for attribute in _NAME_ATTRIBUTES:
            value = _attribute_value(attrs, attribute)
            if value:
                return f"{tag}[{value}]"
        return tag

    @staticmethod
    def _find_closing_line(text: str, tag: str, position: int, line_of) -> int:
        same_tag = re.compile(
            rf"<(?P<closing>/)?{re.escape(tag)}(?=[\s/>])(?:\"[^\"]*\"|'[^']*'|[^'\">])*?(?P<self_closing>/)?>"
        )
        depth = 0
        for match in same_tag.finditer(text, position):
            if match.group("closing"):
                if depth == 0:
                    return line_of(match.end() - 1)
                depth -= 1
            elif not match.group("self_closing"):
                depth += 1
        # Unclosed element: extend to the end of the document.
        return line_of(max(len(text) - 1, 0))

    @staticmethod
    def _pop(stack: List[tuple], tag: str) -> None:
        for position in range(len(stack) - 1, -1, -1):
            if stack[position][0] == tag:
                del stack[position:]
                return

    @staticmethod
    def _collect_namespaces(attrs: str, result: ExtractionResult) -> None:
        for match in _XMLNS_RE.finditer(attrs):
            statement = truncate_statement(match.group(0))
            if statement not in result.imports:
                result.imports.append(statement)
