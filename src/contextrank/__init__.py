"""
contextrank - Importance-ranked codebase digests for LLM context windows

Scans a project, ranks every file by estimated importance (structural
analysis, dependency-graph centrality and filename heuristics) and renders
the result as a single markdown or JSON document.
"""

__version__ = "0.3.0"
__author__ = "Naman Agarwal"

from .analysis import StructuralAnalyzer, StructuralMetrics
from .config import RankConfig, load_config
from .models import RankedFile, SourceFile
from .pipeline import RankingResult, digest_project, rank_files
from .render import ProjectDigest, render_json, render_markdown

__all__ = [
    "rank_files",  # Main entry point
    "RankingResult",
    "digest_project",
    "ProjectDigest",
    "render_markdown",
    "render_json",
    "RankConfig",
    "load_config",
    "SourceFile",
    "RankedFile",
    "StructuralAnalyzer",
    "StructuralMetrics",
]
