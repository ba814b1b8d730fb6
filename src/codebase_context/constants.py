"""
Shared constants for the Codebase Context MCP server.
"""

import os

SETTINGS_DIR = ".codebase-context-mcp"
DEFAULT_STORE_DIR = os.path.join(os.path.expanduser("~"), SETTINGS_DIR)

INDEX_FILE_STEM = "index"
ROOT_KEY_LENGTH = 16

DEFAULT_MAX_FILES = 20_000
DEFAULT_MAX_FILE_SIZE_KB = 512

MAX_SIGNATURE_LENGTH = 200
MAX_DOC_COMMENT_LENGTH = 200
MAX_STATEMENT_LENGTH = 200
MAX_BODY_PREVIEW_LENGTH = 300
BODY_PREVIEW_LINES = 3

MAX_MATCHED_LINES = 5
MAX_MATCHED_LINE_LENGTH = 200
TOP_DIRECTORIES_LIMIT = 15

DIRECTORY_STRUCTURE_DEPTH = 2
DIRECTORY_STRUCTURE_LIMIT = 200

DEFAULT_IGNORE_PATTERNS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "out",
    ".next",
    ".nuxt",
    ".venv",
    "venv",
    "__pycache__",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    "coverage",
    ".nyc_output",
    ".turbo",
    ".cache",
    ".parcel-cache",
    "vendor",
    "target",
    "bin",
    "obj",
    ".idea",
    ".vscode",
    ".DS_Store",
    "Thumbs.db",
    "*.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "*.min.js",
    "*.min.css",
    "*.map",
    "*.bundle.*",
    "*.chunk.*",
    "*.pyc",
    "*.pyo",
    "*.so",
    "*.dylib",
    "*.dll",
    "*.exe",
    "*.bin",
    "*.wasm",
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.svg",
    "*.ico",
    "*.woff",
    "*.woff2",
    "*.ttf",
    "*.eot",
    "*.mp3",
    "*.mp4",
    "*.pdf",
    "*.zip",
    "*.tar",
    "*.gz",
]
