"""Data models shared by discovery, ranking and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .analysis.metrics import StructuralMetrics


@dataclass(frozen=True)
class SourceFile:
    """One decoded text file handed over by discovery.

    ``path`` is the project-relative POSIX path and the identity key.
    """

    path: str
    content: str
    language: str
    size: int

    @classmethod
    def from_text(cls, path: str, content: str, language: str = "text") -> SourceFile:
        return cls(path=path, content=content, language=language, size=len(content.encode("utf-8")))


@dataclass
class RankedFile:
    """A SourceFile enriched with its importance, ready for a renderer."""

    path: str
    content: str
    language: str
    size: int
    importance: float
    heuristic_importance: float
    metrics: Optional[StructuralMetrics] = None
    centrality: Optional[float] = None

    def to_dict(self, include_content: bool = True) -> dict:
        data: dict = {
            "path": self.path,
            "language": self.language,
            "size": self.size,
            "importance": round(self.importance, 4),
        }
        if self.metrics is not None:
            data["structural_metrics"] = self.metrics.to_dict()
            data["centrality"] = None if self.centrality is None else round(self.centrality, 6)
        if include_content:
            data["content"] = self.content
        return data


@dataclass
class ProjectNode:
    """Directory tree entry used in the rendered structure section."""

    name: str
    path: str
    is_dir: bool
    children: list[ProjectNode] = field(default_factory=list)
