"""
Decorator-based error handling for MCP entry points.

Tools never raise into the transport: failures become ``success: False``
payloads and successes are tagged ``success: True``.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

from ..errors import NotIndexedError

logger = logging.getLogger(__name__)

NOT_INDEXED_MESSAGE = "No index found. Run index_codebase first."


def not_indexed_response() -> Dict[str, Any]:
    return {"success": False, "not_indexed": True, "error": NOT_INDEXED_MESSAGE}


def handle_mcp_errors(func: Callable) -> Callable:
    """Standardize the response shape of an MCP tool."""

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)
        except NotIndexedError:
            return not_indexed_response()
        except Exception as e:
            logger.error(f"{func.__name__} failed: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
            return {"success": False, "error": str(e), "function": func.__name__}

        if isinstance(result, dict) and "success" not in result:
            result["success"] = True
        return cast(Dict[str, Any], result)

    return wrapper
