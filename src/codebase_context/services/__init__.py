"""
Service layer between the MCP tools and the indexing/search engine.
"""

from .index_service import CodebaseContextService

__all__ = ['CodebaseContextService']
