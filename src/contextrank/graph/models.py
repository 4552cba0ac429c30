"""Graph data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class GraphNode:
    """Edges of one file, by path.

    ``dependents`` is derived while edges are added; it is never set
    independently of some other node's ``dependencies``.
    """

    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    centrality: float = 0.0

    @property
    def out_degree(self) -> int:
        return len(self.dependencies)


@dataclass
class DependencyGraph:
    """Import graph keyed by project-relative path."""

    nodes: dict[str, GraphNode] = field(default_factory=dict)
    unresolved_count: int = 0

    def add_node(self, path: str) -> GraphNode:
        node = self.nodes.get(path)
        if node is None:
            node = self.nodes[path] = GraphNode()
        return node

    def add_edge(self, source: str, target: str) -> None:
        """source imports target."""
        self.nodes[source].dependencies.append(target)
        self.nodes[target].dependents.append(source)

    @property
    def edge_count(self) -> int:
        return sum(node.out_degree for node in self.nodes.values())

    def centrality(self, path: str) -> float:
        node = self.nodes.get(path)
        return node.centrality if node is not None else 0.0

    def __contains__(self, path: object) -> bool:
        return path in self.nodes

    def __getitem__(self, path: str) -> GraphNode:
        return self.nodes[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> dict:
        return {
            path: {
                "dependencies": list(node.dependencies),
                "dependents": list(node.dependents),
                "centrality": node.centrality,
            }
            for path, node in self.nodes.items()
        }
