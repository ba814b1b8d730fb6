"""
Exception types raised by the indexing and retrieval engine.

Per-file problems (unreadable, binary, unsupported, extraction failures) are
never raised; they only shrink index coverage. The exceptions here are the
failures that abort a whole operation.
"""


class CodebaseContextError(Exception):
    """Base class for all codebase context failures."""


class ProjectPathError(CodebaseContextError, ValueError):
    """The project root is missing, inaccessible or not a directory."""


class IndexWriteError(CodebaseContextError):
    """A snapshot could not be written to the store."""


class NotIndexedError(CodebaseContextError):
    """A query targeted a root with neither a cached nor a persisted index."""

    def __init__(self, root_dir: str):
        super().__init__(f"No index found for {root_dir}. Run index_codebase first.")
        self.root_dir = root_dir
