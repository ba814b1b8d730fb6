"""
Ranking engine: BM25 full-text search and heuristic symbol search.

Both operate on an in-memory ProjectIndex. Full-text search scores each file's
synthetic document; symbol search scores names in tiers.
"""

import logging
import math
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import MAX_MATCHED_LINE_LENGTH, MAX_MATCHED_LINES
from ..indexing.models import ProjectIndex, Symbol, SymbolKind
from ..indexing.tokenizer import document_text, tokenize

logger = logging.getLogger(__name__)

BM25_K1 = 1.2
BM25_B = 0.75

EXACT_MATCH_SCORE = 10.0
PREFIX_MATCH_SCORE = 7.0
SUBSTRING_MATCH_SCORE = 5.0
TOKEN_OVERLAP_WEIGHT = 3.0


@dataclass
class MatchedLine:
    line_number: int
    content: str


@dataclass
class CodeSearchResult:
    file_path: str
    score: float
    matched_lines: List[MatchedLine] = field(default_factory=list)


@dataclass
class SymbolSearchResult:
    symbol: Symbol
    score: float


def average_document_length(index: ProjectIndex) -> float:
    """Mean of (symbols + imports) per file; 1.0 when that mean is zero."""
    if not index.files:
        return 1.0
    total = sum(len(indexed.symbols) + len(indexed.imports) for indexed in index.files.values())
    average = total / len(index.files)
    return average if average > 0 else 1.0


def bm25_idf(total_docs: int, doc_freq: int) -> float:
    return math.log((total_docs - doc_freq + 0.5) / (doc_freq + 0.5) + 1)


def bm25_tf(term_freq: int, doc_length: int, avg_doc_length: float) -> float:
    norm = term_freq + BM25_K1 * (1 - BM25_B + BM25_B * doc_length / avg_doc_length)
    return term_freq * (BM25_K1 + 1) / norm


def search_code(index: ProjectIndex, query: str, max_results: int = 20) -> List[CodeSearchResult]:
    """
    Rank indexed files against ``query`` with BM25.

    Matched lines are read from the files as they currently are on disk, so
    they may drift from the snapshot until the next re-index.
    """
    query_terms = tokenize(query)
    total_docs = index.file_count
    if not query_terms or total_docs == 0 or max_results <= 0:
        return []

    avg_doc_length = average_document_length(index)
    results: List[CodeSearchResult] = []

    for file_path, indexed in index.files.items():
        doc_terms = tokenize(document_text(file_path, indexed))
        term_freqs = Counter(doc_terms)
        doc_length = len(doc_terms)

        score = 0.0
        for term in query_terms:
            term_freq = term_freqs.get(term, 0)
            if term_freq == 0:
                continue
            doc_freq = index.vocabulary.get(term, 0)
            score += bm25_idf(total_docs, doc_freq) * bm25_tf(term_freq, doc_length, avg_doc_length)

        if score > 0:
            matched = find_matching_lines(os.path.join(index.root_dir, file_path), query, query_terms)
            results.append(CodeSearchResult(file_path, score, matched))

    # sorted() is stable: equal scores keep index order.
    results.sort(key=lambda result: result.score, reverse=True)
    return results[:max_results]


def find_matching_lines(absolute_path: str, query: str, query_terms: List[str]) -> List[MatchedLine]:
    """First lines, in file order, containing the raw query or any query term."""
    try:
        with open(absolute_path, "r", encoding="utf-8") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {absolute_path} for matched lines: {e}")
        return []

    needles = [query.lower()] + query_terms
    matched: List[MatchedLine] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        lowered = line.lower()
        if any(needle and needle in lowered for needle in needles):
            matched.append(MatchedLine(line_number, line[:MAX_MATCHED_LINE_LENGTH]))
            if len(matched) >= MAX_MATCHED_LINES:
                break
    return matched


def score_symbol_name(name: str, query_lower: str, query_terms: List[str]) -> float:
    name_lower = name.lower()
    if name_lower == query_lower:
        return EXACT_MATCH_SCORE
    if name_lower.startswith(query_lower):
        return PREFIX_MATCH_SCORE
    if query_lower in name_lower:
        return SUBSTRING_MATCH_SCORE
    if not query_terms:
        return 0.0

    name_terms = tokenize(name)
    overlap = sum(
        1 for term in query_terms
        if any(term in name_term or name_term in term for name_term in name_terms)
    )
    return overlap / len(query_terms) * TOKEN_OVERLAP_WEIGHT


def search_symbols(index: ProjectIndex, query: str, kind: Optional[SymbolKind] = None,
                   max_results: int = 30) -> List[SymbolSearchResult]:
    """Match symbol names against ``query``; an empty query matches nothing."""
    if not query.strip() or max_results <= 0:
        return []
    # Padding is significant: "foo " is not an exact match for foo.
    query_lower = query.lower()
    query_terms = tokenize(query)
    kind_filter = SymbolKind.parse(kind) if isinstance(kind, str) and kind else kind

    results: List[SymbolSearchResult] = []
    for _, symbol in index.iter_symbols():
        if kind_filter is not None and symbol.kind != kind_filter:
            continue
        score = score_symbol_name(symbol.name, query_lower, query_terms)
        if score > 0:
            results.append(SymbolSearchResult(symbol, score))

    results.sort(key=lambda result: result.score, reverse=True)
    return results[:max_results]
