"""
Codebase Context MCP Server

Indexes local source trees into symbol outlines and answers ranked code and
symbol searches over them.
"""

import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import Context, FastMCP

from .config import get_config
from .services import CodebaseContextService
from .utils import handle_mcp_errors, not_indexed_response
from .utils.response_formatter import ResponseFormatter

logger = logging.getLogger(__name__)

DIRECTORY_STRUCTURE_RESPONSE_LIMIT = 50


@dataclass
class CodebaseContext:
    """Lifespan state shared by all tool calls."""

    service: CodebaseContextService


@asynccontextmanager
async def codebase_lifespan(_server: FastMCP) -> AsyncIterator[CodebaseContext]:
    config = get_config()
    logger.info(f"Starting Codebase Context server with {config!r}")
    context = CodebaseContext(service=CodebaseContextService(config=config))
    try:
        yield context
    finally:
        context.service.cache.clear()


mcp = FastMCP("CodebaseContext", lifespan=codebase_lifespan)


def _service(ctx: Context) -> CodebaseContextService:
    return ctx.request_context.lifespan_context.service


@mcp.tool()
@handle_mcp_errors
def index_codebase(directory: str, ctx: Context) -> Dict[str, Any]:
    """
    Index (or incrementally re-index) a project directory.

    Unchanged files are reused by content hash, so re-running after edits is
    cheap. Run this before any search on a new project.

    Args:
        directory: Absolute path to the project root

    Returns:
        Root, file and symbol counts, timestamp, per-language counts and run stats
    """
    service = _service(ctx)
    index = service.index(directory)
    stats = service.last_stats.to_dict() if service.last_stats else {}
    return ResponseFormatter.index_response(index, stats)


@mcp.tool()
@handle_mcp_errors
def search_symbols(directory: str, query: str, ctx: Context, kind: Optional[str] = None,
                   max_results: int = 20) -> Dict[str, Any]:
    """
    Find functions, classes, types and other symbols by name.

    Exact name matches rank first, then prefix matches, then substring
    matches, then partial token overlap.

    Args:
        directory: Absolute path to an indexed project root
        query: Symbol name or fragment (e.g. "parseConfig", "config")
        kind: Optional kind filter (function, class, method, interface, ...)
        max_results: Maximum number of symbols to return
    """
    results = _service(ctx).search_symbols(directory, query, kind=kind, max_results=max_results)
    return ResponseFormatter.symbol_search_response(query, results)


@mcp.tool()
@handle_mcp_errors
def search_code(directory: str, query: str, ctx: Context, max_results: int = 15) -> Dict[str, Any]:
    """
    Full-text search over indexed files, ranked with BM25.

    Each hit lists up to five matching lines from the file.

    Args:
        directory: Absolute path to an indexed project root
        query: Free-text query
        max_results: Maximum number of files to return
    """
    results = _service(ctx).search_code(directory, query, max_results=max_results)
    return ResponseFormatter.code_search_response(query, results)


@mcp.tool()
@handle_mcp_errors
def get_file_outline(directory: str, file_path: str, ctx: Context) -> Dict[str, Any]:
    """
    Outline one indexed file: its symbols in line order plus imports and exports.

    Args:
        directory: Absolute path to an indexed project root
        file_path: Path relative to the project root, using forward slashes
    """
    outline = _service(ctx).get_file_outline(directory, file_path)
    if outline is None:
        return {"success": False, "error": f"File not found in index: {file_path}"}
    return ResponseFormatter.outline_response(outline)


@mcp.tool()
@handle_mcp_errors
def get_project_summary(directory: str, ctx: Context) -> Dict[str, Any]:
    """
    Summarize an indexed project: counts, languages, busiest directories and layout.

    Args:
        directory: Absolute path to an indexed project root
    """
    service = _service(ctx)
    index = service.get_index(directory)
    if index is None:
        return not_indexed_response()
    summary = service.get_project_summary(directory)
    structure = service.get_directory_structure(directory)[:DIRECTORY_STRUCTURE_RESPONSE_LIMIT]
    return ResponseFormatter.summary_response(summary, structure)


def main():
    """Main function to run the MCP server."""
    config = get_config()
    logging.basicConfig(level=config.get_log_level(), stream=sys.stderr,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mcp.run()


if __name__ == '__main__':
    main()
