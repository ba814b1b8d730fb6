"""
Response formatting utilities for MCP tools.

Turns engine results into plain JSON-compatible dictionaries.
"""

from typing import Any, Dict, List, Optional

from ..indexing.models import ProjectIndex, Symbol
from ..search import CodeSearchResult, FileOutline, ProjectSummary, SymbolSearchResult


class ResponseFormatter:
    """Helper class for formatting MCP tool responses consistently."""

    @staticmethod
    def symbol_response(symbol: Symbol, score: Optional[float] = None) -> Dict[str, Any]:
        data = {
            "name": symbol.name,
            "kind": symbol.kind.value,
            "file": symbol.file_path,
            "lines": f"{symbol.start_line}-{symbol.end_line}",
            "signature": symbol.signature,
            "parent": symbol.parent_name,
        }
        if symbol.doc_comment:
            data["doc_comment"] = symbol.doc_comment
        if score is not None:
            data["score"] = round(score, 2)
        return data

    @staticmethod
    def index_response(index: ProjectIndex, stats: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        languages: Dict[str, int] = {}
        for indexed in index.files.values():
            languages[indexed.language] = languages.get(indexed.language, 0) + 1
        return {
            "root_dir": index.root_dir,
            "file_count": index.file_count,
            "symbol_count": index.symbol_count,
            "indexed_at": index.indexed_at,
            "languages": dict(sorted(languages.items())),
            "stats": stats or {},
        }

    @staticmethod
    def symbol_search_response(query: str, results: List[SymbolSearchResult]) -> Dict[str, Any]:
        return {
            "query": query,
            "count": len(results),
            "results": [ResponseFormatter.symbol_response(r.symbol, r.score) for r in results],
        }

    @staticmethod
    def code_search_response(query: str, results: List[CodeSearchResult]) -> Dict[str, Any]:
        return {
            "query": query,
            "count": len(results),
            "results": [
                {
                    "file": result.file_path,
                    "score": round(result.score, 2),
                    "matched_lines": [
                        {"line": line.line_number, "content": line.content}
                        for line in result.matched_lines
                    ],
                }
                for result in results
            ],
        }

    @staticmethod
    def outline_response(outline: FileOutline) -> Dict[str, Any]:
        return {
            "file": outline.file_path,
            "language": outline.language,
            "symbols": [ResponseFormatter.symbol_response(symbol) for symbol in outline.symbols],
            "imports": outline.imports,
            "exports": outline.exports,
        }

    @staticmethod
    def summary_response(summary: ProjectSummary, directory_structure: List[str]) -> Dict[str, Any]:
        return {
            "root_dir": summary.root_dir,
            "indexed_at": summary.indexed_at,
            "file_count": summary.file_count,
            "symbol_count": summary.symbol_count,
            "languages": summary.languages,
            "top_directories": [
                {"directory": entry.directory, "file_count": entry.file_count}
                for entry in summary.top_directories
            ],
            "directory_structure": directory_structure,
        }
