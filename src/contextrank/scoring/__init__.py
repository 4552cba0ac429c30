"""Importance scoring."""

from .importance import (
    ast_importance,
    blend,
    heuristic_importance,
    legacy_ast_importance,
)

__all__ = [
    "ast_importance",
    "legacy_ast_importance",
    "heuristic_importance",
    "blend",
]
