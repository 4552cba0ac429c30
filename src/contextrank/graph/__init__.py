"""Dependency graph construction and centrality."""

from .builder import build_dependency_graph, resolve_dependency
from .centrality import DEFAULT_DAMPING, DEFAULT_ITERATIONS, compute_centrality
from .models import DependencyGraph, GraphNode

__all__ = [
    "DependencyGraph",
    "GraphNode",
    "build_dependency_graph",
    "resolve_dependency",
    "compute_centrality",
    "DEFAULT_DAMPING",
    "DEFAULT_ITERATIONS",
]
