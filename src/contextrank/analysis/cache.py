"""
Per-run memoization of structural analysis results.

Entries are keyed by file path plus a cheap rolling hash of the content.
The cache lives exactly as long as the pipeline run that owns it; there is
no eviction, only an explicit clear().
"""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from .metrics import StructuralMetrics

logger = get_logger(__name__)

_MASK = 0xFFFFFFFF


def rolling_hash(content: str) -> int:
    """32-bit signed ``h = h * 31 + ord(ch)`` accumulator.

    Not collision resistant; good enough to tell two versions of the same
    path apart within one run.
    """
    h = 0
    for ch in content:
        h = (h * 31 + ord(ch)) & _MASK
    if h & 0x80000000:
        h -= 1 << 32
    return h


class AnalysisCache:
    """
    In-memory cache for structural metrics.

    Features:
    - Keys derived from (path, content hash)
    - Append-only, cleared explicitly
    - Hit/miss counters for diagnostics
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: dict[tuple[str, int], StructuralMetrics] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(path: str, content: str) -> tuple[str, int]:
        return (path, rolling_hash(content))

    def get(self, key: tuple[str, int]) -> Optional[StructuralMetrics]:
        """
        Get cached metrics.

        Args:
            key: Key from key_for()

        Returns:
            Cached metrics or None if not present
        """
        if not self.enabled:
            return None

        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
            logger.debug(f"Cache hit: {key[0]}")
        return value

    def set(self, key: tuple[str, int], value: StructuralMetrics) -> None:
        if not self.enabled:
            return
        self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        logger.debug("Analysis cache cleared")

    def stats(self) -> dict:
        return {
            "enabled": self.enabled,
            "size": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }

    def __len__(self) -> int:
        return len(self._entries)
