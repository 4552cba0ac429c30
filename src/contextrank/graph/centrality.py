"""Damped iterative centrality over the dependency graph."""

from __future__ import annotations

from .models import DependencyGraph

DEFAULT_DAMPING = 0.85
DEFAULT_ITERATIONS = 10


def compute_centrality(
    graph: DependencyGraph,
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
) -> DependencyGraph:
    """
    Assign every node a centrality score, in place.

    C(n) = (1 - d) + d * Σ C(m) / out(m)   over dependents m of n

    Every node starts at 1.0. Each iteration reads only the previous
    iteration's scores. The loop runs exactly ``iterations`` times with no
    convergence check, and scores are not normalised, so they do not sum
    to 1 the way a stochastic PageRank would.

    Args:
        graph: Graph to score
        damping: Damping factor
        iterations: Number of iterations

    Returns:
        The same graph, for chaining
    """
    nodes = graph.nodes
    if not nodes:
        return graph

    scores = dict.fromkeys(nodes, 1.0)

    for _ in range(iterations):
        new_scores = {}
        for path, node in nodes.items():
            score = 1.0 - damping
            for dependent in node.dependents:
                out_links = nodes[dependent].out_degree
                if out_links > 0:
                    score += damping * (scores[dependent] / out_links)
            new_scores[path] = score
        scores = new_scores

    for path, node in nodes.items():
        node.centrality = scores[path]

    return graph
