"""
Term normalization shared by indexing and search.

Document text and query text go through the same function so that term
matching stays symmetric.
"""

import re
from typing import List

from .models import IndexedFile

_NON_TERM_CHARS = re.compile(r"[^a-z0-9_$]")


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it into terms longer than one character."""
    return [token for token in _NON_TERM_CHARS.sub(" ", text.lower()).split() if len(token) > 1]


def document_text(file_path: str, indexed_file: IndexedFile) -> str:
    """Build the synthetic document used as the unit of full-text ranking."""
    parts = [file_path]
    parts.extend(
        f"{symbol.name} {symbol.signature} {symbol.body_preview}"
        for symbol in indexed_file.symbols
    )
    parts.extend(indexed_file.imports)
    parts.extend(indexed_file.exports)
    return " ".join(parts)
