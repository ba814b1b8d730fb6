"""
Abstract base class for language parsing strategies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ...constants import (
    BODY_PREVIEW_LINES,
    MAX_BODY_PREVIEW_LENGTH,
    MAX_DOC_COMMENT_LENGTH,
    MAX_SIGNATURE_LENGTH,
    MAX_STATEMENT_LENGTH,
)
from ..models import Symbol, SymbolKind


@dataclass
class ExtractionResult:
    """Symbols plus raw import/export statements for one file."""

    symbols: List[Symbol] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)


class ParsingStrategy(ABC):
    """Abstract base class for language-specific parsing strategies."""

    @abstractmethod
    def get_language_name(self) -> str:
        """Return the language id this strategy handles."""

    @abstractmethod
    def parse_file(self, file_path: str, content: str) -> ExtractionResult:
        """
        Extract symbols, imports and exports from one file.

        Args:
            file_path: Project-relative path, stored on every symbol
            content: Decoded file content

        Returns:
            ExtractionResult for the file
        """

    def _build_symbol(self, name: str, kind: SymbolKind, file_path: str, lines: List[str],
                      start_line: int, end_line: int, parent_name: Optional[str] = None,
                      doc_comment: Optional[str] = None) -> Symbol:
        """Create a Symbol with signature and body preview taken from ``lines``."""
        end_line = max(start_line, end_line)
        signature_line = lines[start_line - 1] if start_line - 1 < len(lines) else ""
        preview_end = min(start_line - 1 + BODY_PREVIEW_LINES, end_line)
        body_lines = lines[start_line - 1:preview_end]

        return Symbol(
            name=name,
            kind=kind,
            file_path=file_path,
            start_line=start_line,
            end_line=end_line,
            signature=truncate(signature_line.strip(), MAX_SIGNATURE_LENGTH),
            parent_name=parent_name,
            doc_comment=truncate(doc_comment, MAX_DOC_COMMENT_LENGTH) if doc_comment else None,
            body_preview=truncate("\n".join(body_lines), MAX_BODY_PREVIEW_LENGTH),
        )


def truncate(text: str, limit: int) -> str:
    return text[:limit]


def truncate_statement(text: str) -> str:
    return truncate(text, MAX_STATEMENT_LENGTH)


def split_lines(content: str) -> List[str]:
    """Split on ``\\n`` only, keeping line numbers aligned with tree-sitter rows."""
    return [line.rstrip("\r") for line in content.split("\n")]
