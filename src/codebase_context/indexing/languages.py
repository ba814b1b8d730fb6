"""
Language detection and tree-sitter parser provider.

Grammar modules are imported lazily and their Language objects cached; every
get_parser() call hands out a fresh Parser so callers on different threads
never share one.
"""

import importlib
import logging
import threading
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple

from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageConfig:
    """Extension mapping and grammar location for one language."""

    language: str
    extensions: Tuple[str, ...]
    grammar_module: Optional[str] = None
    grammar_function: str = "language"

    @property
    def has_grammar(self) -> bool:
        return self.grammar_module is not None


LANGUAGE_CONFIGS: List[LanguageConfig] = [
    LanguageConfig("typescript", (".ts", ".mts", ".cts"),
                   "tree_sitter_typescript", "language_typescript"),
    LanguageConfig("tsx", (".tsx",), "tree_sitter_typescript", "language_tsx"),
    LanguageConfig("javascript", (".js", ".mjs", ".cjs", ".jsx"), "tree_sitter_javascript"),
    LanguageConfig("python", (".py", ".pyw"), "tree_sitter_python"),
    LanguageConfig("css", (".css",), "tree_sitter_css"),
    LanguageConfig("json", (".json",), "tree_sitter_json"),
    LanguageConfig("csharp", (".cs",), "tree_sitter_c_sharp"),
    # No tree-sitter grammar; handled by pattern strategies.
    LanguageConfig("vbnet", (".vb",)),
    LanguageConfig("xaml", (".xaml", ".axaml")),
]

_EXTENSION_MAP: Dict[str, LanguageConfig] = {
    extension: config
    for config in LANGUAGE_CONFIGS
    for extension in config.extensions
}
_LANGUAGE_MAP: Dict[str, LanguageConfig] = {config.language: config for config in LANGUAGE_CONFIGS}

_language_cache: Dict[str, Optional[Language]] = {}
_language_lock = threading.Lock()


def get_language_for_file(file_path: str) -> Optional[LanguageConfig]:
    """Resolve a language from the file extension, or None if unsupported."""
    suffix = PurePosixPath(file_path.replace("\\", "/")).suffix.lower()
    return _EXTENSION_MAP.get(suffix)


def _load_language(config: LanguageConfig) -> Optional[Language]:
    try:
        module = importlib.import_module(config.grammar_module)
    except ImportError:
        logger.info(f"Grammar package {config.grammar_module} not installed; "
                    f"{config.language} files will use a fallback or be skipped")
        return None

    language_func = getattr(module, config.grammar_function, None)
    if language_func is None:
        logger.warning(f"{config.grammar_module} has no {config.grammar_function}()")
        return None
    return Language(language_func())


def get_tree_sitter_language(language: str) -> Optional[Language]:
    """Get the cached tree-sitter Language for ``language``."""
    config = _LANGUAGE_MAP.get(language)
    if config is None or not config.has_grammar:
        return None

    with _language_lock:
        if language not in _language_cache:
            _language_cache[language] = _load_language(config)
        return _language_cache[language]


def get_parser(language: str) -> Optional[Parser]:
    """Get a ready parser for ``language``, or None if no grammar is available."""
    ts_language = get_tree_sitter_language(language)
    if ts_language is None:
        return None
    return Parser(ts_language)
