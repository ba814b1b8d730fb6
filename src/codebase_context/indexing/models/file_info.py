"""
File information model for code indexing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .symbol_info import Symbol


@dataclass
class IndexedFile:
    """Extraction result for one source file."""

    language: str
    hash: str
    size_bytes: int
    symbols: List[Symbol] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "hash": self.hash,
            "size_bytes": self.size_bytes,
            "symbols": [symbol.to_dict() for symbol in self.symbols],
            "imports": list(self.imports),
            "exports": list(self.exports),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexedFile":
        return cls(
            language=data["language"],
            hash=data["hash"],
            size_bytes=int(data.get("size_bytes", 0)),
            symbols=[Symbol.from_dict(item) for item in data.get("symbols", [])],
            imports=list(data.get("imports", [])),
            exports=list(data.get("exports", [])),
        )
