"""File importance scores.

Two independent scores exist for every file:

- heuristic_importance(): filename and content heuristics only. Used alone
  when structural analysis is off.
- ast_importance(): structural metrics plus dependency centrality.

When structural analysis is on, the final importance is blend() of both.
"""

from __future__ import annotations

import posixpath
import re
from typing import Iterable

from ..analysis.characteristics import BACKEND_FRAMEWORKS, FRONTEND_FRAMEWORKS
from ..analysis.metrics import StructuralMetrics

# ── Structural score weights ─────────────────────────────────────────

ENTRY_POINT_BONUS = 20.0
MAIN_LOGIC_BONUS = 15.0
EXPORT_WEIGHT = 3.0
PUBLIC_METHOD_WEIGHT = 2.0
FRAMEWORK_CORE_BONUS = 10.0
CONFIG_FILE_BONUS = 8.0
FRONTEND_FRAMEWORK_BONUS = 5.0
BACKEND_FRAMEWORK_BONUS = 6.0
COMPLEXITY_DIVISOR = 5.0
COMPLEXITY_CAP = 5.0
CENTRALITY_WEIGHT = 10.0
UTILITY_BONUS = 5.0
TEST_FILE_FACTOR = 0.3
GENERATED_FILE_FACTOR = 0.1
IMPORT_PENALTY_THRESHOLD = 10
IMPORT_PENALTY_PER_IMPORT = 0.2

DEFAULT_AST_WEIGHT = 0.7


def _is_main_logic(metrics: StructuralMetrics) -> bool:
    return (
        metrics.export_count > 3
        and metrics.function_count > 5
        and 5 < metrics.complexity < 50
    )


def _is_framework_core(metrics: StructuralMetrics) -> bool:
    return bool(metrics.frameworks) and (metrics.export_count > 0 or metrics.function_count > 3)


def ast_importance(
    metrics: StructuralMetrics, centrality: float, policy: str = "additive"
) -> float:
    """Structural importance of one file, never below zero.

    Additive bonuses first, then the test/generated multipliers, then the
    linear penalty for files importing more than ten modules.
    """
    if policy == "legacy":
        return legacy_ast_importance(metrics, centrality)

    score = 0.0

    if metrics.is_entry_point:
        score += ENTRY_POINT_BONUS
    if _is_main_logic(metrics):
        score += MAIN_LOGIC_BONUS

    # API surface
    score += metrics.export_count * EXPORT_WEIGHT
    score += metrics.public_methods * PUBLIC_METHOD_WEIGHT

    if _is_framework_core(metrics):
        score += FRAMEWORK_CORE_BONUS
    if metrics.is_config_file:
        score += CONFIG_FILE_BONUS

    for framework in metrics.frameworks:
        if framework in FRONTEND_FRAMEWORKS:
            score += FRONTEND_FRAMEWORK_BONUS
        if framework in BACKEND_FRAMEWORKS:
            score += BACKEND_FRAMEWORK_BONUS

    score += min(metrics.complexity / COMPLEXITY_DIVISOR, COMPLEXITY_CAP)
    score += centrality * CENTRALITY_WEIGHT

    # Exports but no imports: most likely a leaf utility module
    if metrics.import_count == 0 and metrics.export_count > 0:
        score += UTILITY_BONUS

    if metrics.is_test_file:
        score *= TEST_FILE_FACTOR
    if metrics.is_generated:
        score *= GENERATED_FILE_FACTOR

    if metrics.import_count > IMPORT_PENALTY_THRESHOLD:
        score -= (metrics.import_count - IMPORT_PENALTY_THRESHOLD) * IMPORT_PENALTY_PER_IMPORT

    return max(score, 0.0)


def legacy_ast_importance(metrics: StructuralMetrics, centrality: float) -> float:
    """Earlier structural policy, kept selectable as ``scoring_policy = "legacy"``.

    Deprecated: weights declarations rather than roles and has no entry
    point, framework or config awareness.
    """
    score = 0.0
    score += metrics.export_count * 2
    score += metrics.class_count * 3
    score += metrics.interface_count * 2
    score += metrics.type_count * 1
    if 5 <= metrics.complexity <= 25:
        score += 5
    score += centrality * CENTRALITY_WEIGHT
    if metrics.is_test_file:
        score *= TEST_FILE_FACTOR
    return max(score, 0.0)


# ── Heuristic score ──────────────────────────────────────────────────

MANIFEST_FILENAMES = frozenset({
    "package.json", "requirements.txt", "cargo.toml", "pom.xml", "build.gradle",
})
ENTRY_FILENAMES = frozenset({"main.py", "index.js", "app.py", "server.js", "main.js"})
KEYWORD_PATTERN = re.compile(r"\b(?:class|function|def|interface|type|export|import)\b")


def heuristic_importance(path: str, content: str, prioritize_files: Iterable[str] = ()) -> float:
    """Filename/content importance, never below zero."""
    importance = 1.0
    file_name = posixpath.basename(path.replace("\\", "/")).lower()

    if any(pf.lower() in file_name for pf in prioritize_files):
        importance += 10
    if file_name in MANIFEST_FILENAMES:
        importance += 8
    if file_name in ENTRY_FILENAMES:
        importance += 7
    if "readme" in file_name or "doc" in file_name:
        importance += 6

    if "test" in path or "spec" in path:
        importance -= 2

    # Smaller files tend to be more central
    if len(content) < 1000:
        importance += 2
    elif len(content) > 10000:
        importance -= 1

    importance += min(len(KEYWORD_PATTERN.findall(content)) / 10, 3)

    return max(importance, 0.0)


def blend(heuristic: float, structural: float, ast_weight: float = DEFAULT_AST_WEIGHT) -> float:
    """Weighted average of the heuristic and structural scores."""
    return heuristic * (1.0 - ast_weight) + structural * ast_weight
