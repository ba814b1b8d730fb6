"""
Keyword-block pattern strategy for languages without a tree-sitter grammar.

Declarations are recognised line by line against an ordered list of
BlockConstruct regexes. A construct's extent is found by scanning forward for
its ``End <keyword>`` line while counting nested openings of the same keyword.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from ..models import SymbolKind
from .base_strategy import ExtractionResult, ParsingStrategy, split_lines, truncate_statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockConstruct:
    """One declaration form and the keyword that closes it."""

    keyword: str
    kind: SymbolKind
    pattern: Pattern
    container: bool = False
    block: bool = True

    def match_name(self, line: str) -> Optional[str]:
        match = self.pattern.match(line)
        return match.group("name") if match else None


@dataclass
class _OpenBlock:
    keyword: str
    name: str


class KeywordBlockStrategy(ParsingStrategy):
    """Line scanner driven by a language's BlockConstruct table."""

    language: str = ""
    constructs: Sequence[BlockConstruct] = ()
    end_pattern: Pattern = re.compile(r"^\s*End\s+(?P<keyword>\w+)", re.IGNORECASE)
    comment_pattern: Optional[Pattern] = None
    import_pattern: Optional[Pattern] = None
    attribute_pattern: Optional[Pattern] = None
    # Declarations that never carry a body of their own.
    one_liner_pattern: Optional[Pattern] = None
    one_liner_parents: frozenset = frozenset()
    # Unnamed blocks (lambdas) that open mid-line and close with End <keyword>.
    inline_block_pattern: Optional[Pattern] = None

    def get_language_name(self) -> str:
        return self.language

    def parse_file(self, file_path: str, content: str) -> ExtractionResult:
        lines = split_lines(content)
        result = ExtractionResult()
        stack: List[_OpenBlock] = []
        doc_lines: List[str] = []

        index = 0
        while index < len(lines):
            line = lines[index]
            stripped = line.strip()
            index += 1

            if not stripped:
                doc_lines = []
                continue
            if self.comment_pattern is not None and self.comment_pattern.match(line):
                doc_lines.append(stripped)
                continue
            if self.attribute_pattern is not None and self.attribute_pattern.match(line):
                continue
            if self.import_pattern is not None and self.import_pattern.match(line):
                result.imports.append(truncate_statement(stripped))
                doc_lines = []
                continue

            end_match = self.end_pattern.match(line)
            if end_match is not None:
                self._close_block(stack, end_match.group("keyword"))
                doc_lines = []
                continue

            matched = self._match_construct(line)
            if matched is None:
                doc_lines = []
                continue

            construct, name = matched
            start_line = index
            end_line = self._find_end(lines, start_line, construct, stack)
            symbol = self._build_symbol(
                name=name,
                kind=construct.kind,
                file_path=file_path,
                lines=lines,
                start_line=start_line,
                end_line=end_line or start_line,
                parent_name=stack[-1].name if stack else None,
                doc_comment="\n".join(doc_lines) if doc_lines else None,
            )
            result.symbols.append(symbol)
            doc_lines = []

            if end_line is None:
                continue
            if construct.container:
                stack.append(_OpenBlock(construct.keyword, name))
            else:
                # Member bodies hold no further declarations.
                index = end_line

        return result

    def _match_construct(self, line: str) -> Optional[Tuple[BlockConstruct, str]]:
        for construct in self.constructs:
            name = construct.match_name(line)
            if name:
                return construct, name
        return None

    def _find_end(self, lines: List[str], start_line: int, construct: BlockConstruct,
                  stack: List[_OpenBlock]) -> Optional[int]:
        """Return the 1-based closing line, or None when the construct is a one-liner."""
        if not construct.block:
            return None
        if self.one_liner_pattern is not None and self.one_liner_pattern.search(lines[start_line - 1]):
            return None
        if stack and stack[-1].keyword.lower() in self.one_liner_parents:
            return None

        keyword = construct.keyword.lower()
        enclosing = {block.keyword.lower() for block in stack}
        depth = 0
        for offset, line in enumerate(lines[start_line:], start=start_line + 1):
            end_match = self.end_pattern.match(line)
            if end_match is not None:
                closing = end_match.group("keyword").lower()
                if closing == keyword:
                    if depth == 0:
                        return offset
                    depth -= 1
                elif closing in enclosing:
                    return None
                continue
            if (construct.pattern.match(line) or self._opens_same_keyword(line, keyword)
                    or self._opens_inline_block(line, keyword)):
                depth += 1
        return None

    def _opens_same_keyword(self, line: str, keyword: str) -> bool:
        return any(
            other.keyword.lower() == keyword and other.block and other.pattern.match(line)
            for other in self.constructs
        )

    def _opens_inline_block(self, line: str, keyword: str) -> bool:
        if self.inline_block_pattern is None:
            return False
        match = self.inline_block_pattern.search(line)
        return match is not None and match.group("keyword").lower() == keyword

    @staticmethod
    def _close_block(stack: List[_OpenBlock], keyword: str) -> None:
        if stack and stack[-1].keyword.lower() == keyword.lower():
            stack.pop()
