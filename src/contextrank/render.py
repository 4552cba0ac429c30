"""Markdown and JSON renderers for a ranked project digest."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from .logging_config import get_logger
from .models import ProjectNode, RankedFile
from .tokens import estimate_tokens

logger = get_logger(__name__)


@dataclass
class ProjectDigest:
    """Everything a renderer needs: ranked files, structure, summary."""

    name: str
    files: list[RankedFile]
    structure: Optional[ProjectNode] = None
    summary: str = ""
    used_ast_analysis: bool = False
    extra: dict = field(default_factory=dict)


def build_summary(files: list[RankedFile], used_ast_analysis: bool = False) -> str:
    """One-paragraph project summary: counts, languages, size, AST totals."""
    languages = sorted({f.language for f in files})
    total_kb = sum(f.size for f in files) / 1024
    summary = (
        f"Project contains {len(files)} files in {len(languages)} different languages "
        f"({', '.join(languages)}). Total size: {total_kb:.2f} KB."
    )

    if used_ast_analysis:
        analyzed = [f.metrics for f in files if f.metrics is not None]
        if analyzed:
            exports = sum(m.export_count for m in analyzed)
            functions = sum(m.function_count for m in analyzed)
            classes = sum(m.class_count for m in analyzed)
            summary += (
                f" AST Analysis: {exports} exports, {functions} functions, {classes} classes "
                f"across {len(analyzed)} analyzed files."
            )
    return summary


def render_tree(node: ProjectNode) -> list[str]:
    """Indented text lines for a directory tree, root excluded."""
    lines: list[str] = []
    stack = [(child, 0) for child in reversed(node.children)]
    while stack:
        current, depth = stack.pop()
        suffix = "/" if current.is_dir else ""
        lines.append(f"{'  ' * depth}{current.name}{suffix}")
        stack.extend((child, depth + 1) for child in reversed(current.children))
    return lines


def _fence_for(content: str) -> str:
    fence = "```"
    while fence in content:
        fence += "`"
    return fence


def _file_section(ranked: RankedFile, include_metadata: bool) -> str:
    parts = [f"### {ranked.path}", ""]
    if include_metadata:
        meta = (
            f"- Language: {ranked.language}\n"
            f"- Size: {ranked.size} bytes\n"
            f"- Importance: {ranked.importance:.2f}"
        )
        metrics = ranked.metrics
        if metrics is not None:
            meta += (
                f"\n- Structure: {metrics.export_count} exports, "
                f"{metrics.function_count} functions, {metrics.class_count} classes, "
                f"complexity {metrics.complexity:g}"
            )
            if metrics.frameworks:
                meta += f"\n- Frameworks: {', '.join(metrics.frameworks)}"
        parts.extend([meta, ""])

    fence = _fence_for(ranked.content)
    language = "" if ranked.language == "text" else ranked.language
    body = ranked.content if ranked.content.endswith("\n") else ranked.content + "\n"
    parts.append(f"{fence}{language}\n{body}{fence}")
    parts.append("")
    return "\n".join(parts)


def render_markdown(
    digest: ProjectDigest, include_metadata: bool = True, max_tokens: Optional[int] = None
) -> str:
    """Render the digest as markdown, most important files first.

    With ``max_tokens`` the least important files are dropped once the
    estimated size of the document would exceed the budget.
    """
    header = [f"# {digest.name}", "", "## Summary", "", digest.summary, ""]
    if digest.structure is not None:
        header.extend(["## Structure", "", "```", *render_tree(digest.structure), "```", ""])
    header.extend(["## Files", ""])
    document = "\n".join(header)

    used = estimate_tokens(document)
    sections: list[str] = []
    omitted = 0
    for ranked in digest.files:
        section = _file_section(ranked, include_metadata)
        if max_tokens is not None:
            cost = estimate_tokens(section)
            if used + cost > max_tokens:
                omitted = len(digest.files) - len(sections)
                break
            used += cost
        sections.append(section)

    if omitted:
        logger.info(f"Token budget of {max_tokens} reached, omitted {omitted} files")
        sections.append(f"_{omitted} lower-ranked files omitted to fit {max_tokens} tokens._\n")

    return document + "\n" + "\n".join(sections)


def render_json(
    digest: ProjectDigest, include_metadata: bool = True, max_tokens: Optional[int] = None
) -> str:
    """Render the digest as JSON with the same file order and budget rule."""
    files: list[dict] = []
    used = 0
    omitted = 0
    for ranked in digest.files:
        entry = ranked.to_dict(include_content=True)
        if not include_metadata:
            entry = {"path": entry["path"], "content": entry["content"]}
        if max_tokens is not None:
            cost = estimate_tokens(ranked.content)
            if used + cost > max_tokens:
                omitted = len(digest.files) - len(files)
                break
            used += cost
        files.append(entry)

    data = {
        "name": digest.name,
        "summary": digest.summary,
        "used_ast_analysis": digest.used_ast_analysis,
        "files": files,
        "omitted_files": omitted,
    }
    if digest.structure is not None:
        data["structure"] = _node_to_dict(digest.structure)
    data.update(digest.extra)
    return json.dumps(data, indent=2)


def _node_to_dict(node: ProjectNode) -> dict:
    data: dict = {"name": node.name, "path": node.path, "type": "directory" if node.is_dir else "file"}
    if node.is_dir:
        data["children"] = [_node_to_dict(child) for child in node.children]
    return data
