"""
Parsing strategies for different programming languages.

StrategyFactory resolves a language id to a strategy by capability: a
tree-sitter strategy when the grammar package is importable, otherwise a
pattern strategy when one exists, otherwise nothing.
"""

import logging
import threading
from functools import partial
from typing import Callable, Dict, Optional, Type

from ..languages import get_parser
from .base_strategy import ExtractionResult, ParsingStrategy
from .csharp_strategy import CSharpParsingStrategy
from .css_strategy import CssParsingStrategy
from .javascript_strategy import JavaScriptParsingStrategy
from .json_strategy import JsonParsingStrategy
from .markup_strategy import MarkupParsingStrategy
from .pattern_strategy import BlockConstruct, KeywordBlockStrategy
from .python_strategy import PythonParsingStrategy
from .tree_sitter_strategy import TreeSitterGrammar, TreeSitterStrategy
from .typescript_strategy import TsxParsingStrategy, TypeScriptParsingStrategy
from .vbnet_strategy import VbNetParsingStrategy

logger = logging.getLogger(__name__)

TREE_SITTER_STRATEGIES: Dict[str, Type[TreeSitterStrategy]] = {
    "python": PythonParsingStrategy,
    "javascript": JavaScriptParsingStrategy,
    "typescript": TypeScriptParsingStrategy,
    "tsx": TsxParsingStrategy,
    "csharp": CSharpParsingStrategy,
    "css": CssParsingStrategy,
    "json": JsonParsingStrategy,
}

PATTERN_STRATEGIES: Dict[str, Callable[[], ParsingStrategy]] = {
    "vbnet": VbNetParsingStrategy,
    "xaml": partial(MarkupParsingStrategy, "xaml"),
}


class StrategyFactory:
    """Factory for creating and caching parsing strategies."""

    def __init__(self, parser_provider: Callable[[str], object] = get_parser):
        self._parser_provider = parser_provider
        self._strategies: Dict[str, Optional[ParsingStrategy]] = {}
        self._lock = threading.Lock()

    def get_strategy(self, language: str) -> Optional[ParsingStrategy]:
        """
        Get the strategy for a language id.

        Args:
            language: Language id from the language table

        Returns:
            A ParsingStrategy, or None when the language is unsupported here
        """
        with self._lock:
            if language not in self._strategies:
                self._strategies[language] = self._create_strategy(language)
            return self._strategies[language]

    def _create_strategy(self, language: str) -> Optional[ParsingStrategy]:
        strategy_class = TREE_SITTER_STRATEGIES.get(language)
        # Probe once so a missing grammar falls through to the pattern family.
        if strategy_class is not None and self._parser_provider(language) is not None:
            return strategy_class(partial(self._parser_provider, language))

        pattern_factory = PATTERN_STRATEGIES.get(language)
        if pattern_factory is not None:
            return pattern_factory()

        logger.debug(f"No parsing strategy available for {language}")
        return None

    def get_strategy_info(self) -> Dict[str, str]:
        """Describe which family serves each known language."""
        info = {}
        for language in sorted(set(TREE_SITTER_STRATEGIES) | set(PATTERN_STRATEGIES)):
            strategy = self.get_strategy(language)
            if strategy is None:
                info[language] = "unavailable"
            elif isinstance(strategy, TreeSitterStrategy):
                info[language] = "tree-sitter"
            else:
                info[language] = "pattern"
        return info


__all__ = [
    "BlockConstruct",
    "ExtractionResult",
    "KeywordBlockStrategy",
    "MarkupParsingStrategy",
    "ParsingStrategy",
    "StrategyFactory",
    "TreeSitterGrammar",
    "TreeSitterStrategy",
]
