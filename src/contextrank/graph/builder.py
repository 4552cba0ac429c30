"""Dependency graph construction from raw import strings."""

from __future__ import annotations

import posixpath
from typing import Iterable, Optional

from ..analysis.metrics import StructuralMetrics
from ..logging_config import get_logger
from .models import DependencyGraph

logger = get_logger(__name__)

# Probe order for a relative import; "" means the import already names the file.
SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".py", "")

RELATIVE_PREFIXES = ("./", "../")


def resolve_dependency(dep: str, from_path: str, known_paths: set[str]) -> Optional[str]:
    """Map a raw import string to a path in the batch.

    Only ``./`` and ``../`` imports are resolved. Candidates, in order:
    the joined path itself, the path plus each of SOURCE_EXTENSIONS, then
    ``<path>/index<ext>`` for each non-empty extension. Returns None when
    nothing in ``known_paths`` matches.
    """
    if not dep.startswith(RELATIVE_PREFIXES):
        return None

    from_dir = posixpath.dirname(from_path.replace("\\", "/"))
    resolved = posixpath.normpath(posixpath.join(from_dir, dep))
    if resolved == ".." or resolved.startswith("../"):
        return None

    candidates = [resolved]
    candidates.extend(resolved + ext for ext in SOURCE_EXTENSIONS)
    candidates.extend(
        posixpath.join(resolved, "index" + ext) for ext in SOURCE_EXTENSIONS if ext
    )

    for candidate in candidates:
        if candidate in known_paths:
            return candidate
    return None


def build_dependency_graph(files: Iterable[tuple[str, StructuralMetrics]]) -> DependencyGraph:
    """Build the import graph for one batch.

    Every input path becomes a node, even without edges. Each import
    statement that resolves adds one edge, so repeated imports of the same
    file add repeated edges. Unresolved imports (packages, files outside
    the batch) are dropped.
    """
    files = list(files)
    graph = DependencyGraph()
    for path, _ in files:
        graph.add_node(path)

    known_paths = set(graph.nodes)

    for path, metrics in files:
        for dep in metrics.dependencies:
            resolved = resolve_dependency(dep, path, known_paths)
            if resolved is None:
                graph.unresolved_count += 1
                continue
            graph.add_edge(path, resolved)

    logger.debug(
        f"Dependency graph: {len(graph)} nodes, {graph.edge_count} edges, "
        f"{graph.unresolved_count} unresolved imports"
    )
    return graph
