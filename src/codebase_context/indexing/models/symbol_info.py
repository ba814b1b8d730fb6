"""
Symbol information model for code indexing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class SymbolKind(str, Enum):
    """Closed set of symbol kinds produced by every extraction strategy."""

    FUNCTION = "function"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    STRUCT = "struct"
    PROPERTY = "property"
    FIELD = "field"
    DELEGATE = "delegate"
    EVENT = "event"
    NAMESPACE = "namespace"
    VARIABLE = "variable"
    ELEMENT = "element"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "SymbolKind":
        """Map a stored kind string back to the enum, tolerating unknown values."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Symbol:
    """A named, located code entity."""

    name: str
    kind: SymbolKind
    file_path: str
    start_line: int
    end_line: int
    signature: str
    parent_name: Optional[str] = None
    doc_comment: Optional[str] = None
    body_preview: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Symbol name cannot be empty")
        if self.end_line < self.start_line:
            self.end_line = self.start_line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "file_path": self.file_path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "signature": self.signature,
            "parent_name": self.parent_name,
            "doc_comment": self.doc_comment,
            "body_preview": self.body_preview,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Symbol":
        return cls(
            name=data["name"],
            kind=SymbolKind.parse(data.get("kind", "unknown")),
            file_path=data.get("file_path", ""),
            start_line=int(data.get("start_line", 1)),
            end_line=int(data.get("end_line", data.get("start_line", 1))),
            signature=data.get("signature", ""),
            parent_name=data.get("parent_name"),
            doc_comment=data.get("doc_comment"),
            body_preview=data.get("body_preview", ""),
        )
