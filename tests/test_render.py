"""Tests for the markdown and JSON renderers."""

import json

import pytest

from contextrank.analysis import StructuralMetrics
from contextrank.models import ProjectNode, RankedFile
from contextrank.render import (
    ProjectDigest,
    build_summary,
    render_json,
    render_markdown,
    render_tree,
)


def ranked(path, content, importance, language="typescript", metrics=None):
    return RankedFile(
        path=path,
        content=content,
        language=language,
        size=len(content),
        importance=importance,
        heuristic_importance=importance,
        metrics=metrics,
        centrality=0.15 if metrics is not None else None,
    )


@pytest.fixture
def digest():
    structure = ProjectNode(
        name="demo",
        path="",
        is_dir=True,
        children=[
            ProjectNode(
                name="src",
                path="src",
                is_dir=True,
                children=[ProjectNode(name="index.ts", path="src/index.ts", is_dir=False)],
            ),
            ProjectNode(name="README.md", path="README.md", is_dir=False),
        ],
    )
    files = [
        ranked("src/index.ts", "export const a = 1;\n", 9.0),
        ranked("README.md", "# Demo\n", 4.5, language="markdown"),
    ]
    return ProjectDigest(name="demo", files=files, structure=structure, summary="Two files.")


class TestBuildSummary:
    """Test the summary paragraph."""

    def test_counts_and_languages(self):
        files = [ranked("a.ts", "x" * 1024, 1.0), ranked("b.py", "", 1.0, language="python")]
        summary = build_summary(files)
        assert summary == (
            "Project contains 2 files in 2 different languages (python, typescript). "
            "Total size: 1.00 KB."
        )

    def test_ast_totals(self):
        metrics = StructuralMetrics(export_count=2, function_count=3, class_count=1)
        files = [ranked("a.ts", "x", 1.0, metrics=metrics), ranked("b.ts", "y", 1.0, metrics=metrics)]
        summary = build_summary(files, used_ast_analysis=True)
        assert summary.endswith(
            "AST Analysis: 4 exports, 6 functions, 2 classes across 2 analyzed files."
        )

    def test_no_ast_totals_when_disabled(self):
        metrics = StructuralMetrics(export_count=2)
        summary = build_summary([ranked("a.ts", "x", 1.0, metrics=metrics)])
        assert "AST" not in summary


class TestRenderTree:
    """Test the indented structure listing."""

    def test_tree_lines(self, digest):
        assert render_tree(digest.structure) == ["src/", "  index.ts", "README.md"]


class TestRenderMarkdown:
    """Test markdown output."""

    def test_sections_in_order(self, digest):
        text = render_markdown(digest)
        assert text.startswith("# demo\n")
        assert text.index("## Summary") < text.index("## Structure") < text.index("## Files")
        assert text.index("### src/index.ts") < text.index("### README.md")

    def test_fenced_content(self, digest):
        text = render_markdown(digest)
        assert "```typescript\nexport const a = 1;\n```" in text

    def test_metadata_toggle(self, digest):
        assert "- Importance: 9.00" in render_markdown(digest)
        assert "- Importance:" not in render_markdown(digest, include_metadata=False)

    def test_structural_metadata(self):
        metrics = StructuralMetrics(export_count=1, function_count=2, complexity=3, frameworks=["react"])
        digest = ProjectDigest(name="x", files=[ranked("a.tsx", "x", 1.0, metrics=metrics)])
        text = render_markdown(digest)
        assert "- Structure: 1 exports, 2 functions, 0 classes, complexity 3" in text
        assert "- Frameworks: react" in text

    def test_content_with_backticks_gets_longer_fence(self):
        content = "Example:\n```js\nx()\n```\n"
        digest = ProjectDigest(name="x", files=[ranked("doc.md", content, 1.0, language="markdown")])
        text = render_markdown(digest)
        assert "````markdown\n" + content + "````" in text

    def test_token_budget_drops_least_important(self):
        files = [ranked(f"f{i}.ts", "word " * 200, 10.0 - i) for i in range(5)]
        digest = ProjectDigest(name="x", files=files)
        text = render_markdown(digest, max_tokens=700)

        assert "### f0.ts" in text
        assert "### f4.ts" not in text
        assert "lower-ranked files omitted" in text

    def test_no_budget_keeps_everything(self):
        files = [ranked(f"f{i}.ts", "word " * 200, 10.0 - i) for i in range(5)]
        text = render_markdown(ProjectDigest(name="x", files=files))
        assert all(f"### f{i}.ts" in text for i in range(5))
        assert "omitted" not in text


class TestRenderJson:
    """Test JSON output."""

    def test_structure(self, digest):
        data = json.loads(render_json(digest))
        assert data["name"] == "demo"
        assert data["summary"] == "Two files."
        assert [f["path"] for f in data["files"]] == ["src/index.ts", "README.md"]
        assert data["files"][0]["importance"] == 9.0
        assert data["structure"]["children"][0]["type"] == "directory"
        assert data["omitted_files"] == 0

    def test_without_metadata(self, digest):
        data = json.loads(render_json(digest, include_metadata=False))
        assert set(data["files"][0]) == {"path", "content"}

    def test_structural_metrics_included(self):
        metrics = StructuralMetrics(function_count=2)
        digest = ProjectDigest(name="x", files=[ranked("a.ts", "x", 1.0, metrics=metrics)])
        data = json.loads(render_json(digest))
        assert data["files"][0]["structural_metrics"]["function_count"] == 2
        assert data["files"][0]["centrality"] == 0.15

    def test_token_budget(self):
        files = [ranked(f"f{i}.ts", "word " * 200, 10.0 - i) for i in range(5)]
        data = json.loads(render_json(ProjectDigest(name="x", files=files), max_tokens=700))
        assert data["omitted_files"] > 0
        assert data["files"][0]["path"] == "f0.ts"
