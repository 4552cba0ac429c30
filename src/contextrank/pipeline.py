"""Ranking pipeline: heuristics, structural analysis, graph, centrality, blend.

Phases run strictly in sequence:

    1. heuristic score for every file
    2. structural analysis of every file            (only with AST analysis)
    3. dependency graph over all files' imports     (needs all of phase 2)
    4. centrality over the graph
    5. structural score, blended with the heuristic
    6. sort by descending importance
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .analysis import AnalysisCache, StructuralAnalyzer, StructuralMetrics
from .config import DEFAULT_CONFIG, RankConfig
from .discovery import ProjectScanner
from .graph import DependencyGraph, build_dependency_graph, compute_centrality
from .logging_config import get_logger
from .models import RankedFile, SourceFile
from .render import ProjectDigest, build_summary
from .scoring import ast_importance, blend, heuristic_importance

logger = get_logger(__name__)


@dataclass
class RankingResult:
    """Ranked files plus the graph and cache statistics of the run."""

    files: list[RankedFile] = field(default_factory=list)
    graph: Optional[DependencyGraph] = None
    used_ast_analysis: bool = False
    cache_stats: dict = field(default_factory=dict)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def get(self, path: str) -> Optional[RankedFile]:
        for ranked in self.files:
            if ranked.path == path:
                return ranked
        return None


def _analyze_all(
    files: list[SourceFile], analyzer: StructuralAnalyzer
) -> dict[str, StructuralMetrics]:
    metrics: dict[str, StructuralMetrics] = {}
    for source in files:
        metrics[source.path] = analyzer.analyze(source.path, source.content, source.language)
    logger.debug(f"Structural analysis complete for {len(metrics)} files")
    return metrics


def rank_files(
    files: Iterable[SourceFile],
    config: RankConfig = DEFAULT_CONFIG,
    analyzer: Optional[StructuralAnalyzer] = None,
) -> RankingResult:
    """Score and order a batch of files.

    Args:
        files: Decoded text files, unique by path
        config: Run configuration (AST toggle, prioritized filenames, weights)
        analyzer: Optional analyzer to use; a fresh one (with a fresh cache)
            is created for every call otherwise

    Returns:
        RankingResult with files sorted by descending importance
    """
    files = list(files)
    result = RankingResult(used_ast_analysis=config.use_ast_analysis)

    heuristics = {
        source.path: heuristic_importance(source.path, source.content, config.prioritize_files)
        for source in files
    }

    if not config.use_ast_analysis:
        result.files = [
            RankedFile(
                path=source.path,
                content=source.content,
                language=source.language,
                size=source.size,
                importance=heuristics[source.path],
                heuristic_importance=heuristics[source.path],
            )
            for source in files
        ]
        result.files.sort(key=lambda f: (-f.importance, f.path))
        return result

    if analyzer is None:
        analyzer = StructuralAnalyzer(cache=AnalysisCache())

    metrics = _analyze_all(files, analyzer)

    graph = build_dependency_graph(metrics.items())
    compute_centrality(
        graph, damping=config.centrality_damping, iterations=config.centrality_iterations
    )
    result.graph = graph

    for source in files:
        file_metrics = metrics[source.path]
        centrality = graph.centrality(source.path)
        structural = ast_importance(file_metrics, centrality, policy=config.scoring_policy)
        result.files.append(
            RankedFile(
                path=source.path,
                content=source.content,
                language=source.language,
                size=source.size,
                importance=blend(heuristics[source.path], structural, config.ast_weight),
                heuristic_importance=heuristics[source.path],
                metrics=file_metrics,
                centrality=centrality,
            )
        )

    result.files.sort(key=lambda f: (-f.importance, f.path))
    result.cache_stats = analyzer.cache.stats()
    logger.info(
        f"Ranked {len(result.files)} files ({graph.edge_count} dependency edges)"
    )
    return result


def digest_project(root: Path, config: RankConfig = DEFAULT_CONFIG) -> ProjectDigest:
    """Discover, rank and summarise a project directory.

    Raises:
        InvalidPathError: If ``root`` is missing or not a directory
    """
    scanner = ProjectScanner(root, config)
    files = scanner.scan()
    result = rank_files(files, config)
    return ProjectDigest(
        name=scanner.root.name,
        files=result.files,
        structure=scanner.build_tree(),
        summary=build_summary(result.files, result.used_ast_analysis),
        used_ast_analysis=result.used_ast_analysis,
    )
