"""Structural analysis of individual files."""

from .analyzer import StructuralAnalyzer
from .cache import AnalysisCache, rolling_hash
from .metrics import StructuralMetrics
from .strategies import (
    AnalysisStrategy,
    GenericRegexStrategy,
    PythonRegexStrategy,
    TreeSitterStrategy,
)

__all__ = [
    "StructuralAnalyzer",
    "StructuralMetrics",
    "AnalysisCache",
    "rolling_hash",
    "AnalysisStrategy",
    "TreeSitterStrategy",
    "PythonRegexStrategy",
    "GenericRegexStrategy",
]
