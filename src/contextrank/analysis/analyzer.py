"""StructuralAnalyzer: per-file metrics through an ordered strategy chain."""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from .cache import AnalysisCache
from .characteristics import detect_frameworks, is_config_file, is_entry_point, is_test_file
from .metrics import StructuralMetrics
from .strategies import (
    AnalysisStrategy,
    GenericRegexStrategy,
    PythonRegexStrategy,
    TreeSitterStrategy,
)
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser

logger = get_logger(__name__)

# language tag -> [(grammar, typed), ...] tried in order before the regex tail
_GRAMMARS: dict[str, list[tuple[str, bool]]] = {
    # TypeScript sources may carry JSX; retry with the TSX grammar.
    "typescript": [("typescript", True), ("tsx", True)],
    "tsx": [("tsx", True)],
    "javascript": [("javascript", False)],
    "jsx": [("javascript", False)],
}


class StructuralAnalyzer:
    """Extracts StructuralMetrics from one file at a time.

    analyze() never raises: a strategy that fails hands over to the next one
    and the chain always ends with the generic regex strategy. Results are
    memoized in the analyzer's own cache, so construct one analyzer per run.

    Usage:
        analyzer = StructuralAnalyzer()
        metrics = analyzer.analyze("src/app.ts", content, "typescript")
    """

    def __init__(
        self,
        cache: Optional[AnalysisCache] = None,
        parser: Optional[TreeSitterParser] = None,
    ) -> None:
        self.cache = cache if cache is not None else AnalysisCache()
        if parser is None and TREE_SITTER_AVAILABLE:
            parser = TreeSitterParser()
        self.parser = parser
        self._generic = GenericRegexStrategy()
        self._python = PythonRegexStrategy()

    def strategies_for(self, language: str) -> list[AnalysisStrategy]:
        """Ordered strategy chain for a language tag."""
        chain: list[AnalysisStrategy] = [
            TreeSitterStrategy(self.parser, grammar, typed)
            for grammar, typed in _GRAMMARS.get(language, [])
        ]
        if language == "python":
            chain.append(self._python)
        chain.append(self._generic)
        return chain

    def analyze(self, path: str, content: str, language: str) -> StructuralMetrics:
        key = self.cache.key_for(path, content)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        template = StructuralMetrics(
            frameworks=detect_frameworks(content),
            is_entry_point=is_entry_point(path, content),
            is_test_file=is_test_file(path, content),
            is_config_file=is_config_file(path),
        )

        result = self._run_chain(path, content, language, template)
        self.cache.set(key, result)
        return result

    def _run_chain(
        self, path: str, content: str, language: str, template: StructuralMetrics
    ) -> StructuralMetrics:
        for strategy in self.strategies_for(language):
            try:
                result = strategy.analyze(path, content, template.fresh())
            except Exception as e:
                logger.debug(f"{strategy.name} failed on {path}: {e}")
                continue
            if result is not None:
                result.strategy = strategy.name
                return result
            logger.debug(f"{strategy.name} gave up on {path}, trying next strategy")

        # The generic strategy does not fail; this only guards against a
        # regex engine error on pathological input.
        fallback = template.fresh()
        fallback.strategy = "none"
        return fallback

    def clear_cache(self) -> None:
        self.cache.clear()
