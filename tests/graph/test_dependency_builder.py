"""Tests for import resolution and dependency graph construction."""

import pytest

from contextrank.analysis import StructuralMetrics
from contextrank.graph import build_dependency_graph, resolve_dependency

KNOWN = {
    "src/index.ts",
    "src/utils.ts",
    "src/components/Button.tsx",
    "src/lib/index.js",
    "src/data.json",
    "scripts/tool.py",
}


class TestResolveDependency:
    """Test relative import resolution."""

    def test_extension_probing(self):
        assert resolve_dependency("./utils", "src/index.ts", KNOWN) == "src/utils.ts"

    def test_tsx_extension(self):
        assert (
            resolve_dependency("./components/Button", "src/index.ts", KNOWN)
            == "src/components/Button.tsx"
        )

    def test_exact_path(self):
        assert resolve_dependency("./data.json", "src/index.ts", KNOWN) == "src/data.json"

    def test_index_file(self):
        assert resolve_dependency("./lib", "src/index.ts", KNOWN) == "src/lib/index.js"

    def test_parent_directory(self):
        assert resolve_dependency("../utils", "src/components/Button.tsx", KNOWN) == "src/utils.ts"

    def test_package_imports_are_not_resolved(self):
        assert resolve_dependency("react", "src/index.ts", KNOWN) is None
        assert resolve_dependency("@scope/pkg", "src/index.ts", KNOWN) is None

    def test_missing_target(self):
        assert resolve_dependency("./missing", "src/index.ts", KNOWN) is None

    def test_escaping_project_root(self):
        assert resolve_dependency("../../outside", "src/index.ts", KNOWN | {"../outside.ts"}) is None

    def test_idempotent(self):
        first = resolve_dependency("./utils", "src/index.ts", KNOWN)
        second = resolve_dependency("./utils", "src/index.ts", KNOWN)
        assert first == second == "src/utils.ts"

    def test_bare_path_wins_over_extension(self):
        known = {"src/config", "src/config.ts"}
        assert resolve_dependency("./config", "src/index.ts", known) == "src/config"

    def test_root_level_importer(self):
        assert resolve_dependency("./scripts/tool", "setup.py", KNOWN) == "scripts/tool.py"


class TestBuildDependencyGraph:
    """Test graph construction."""

    def test_chain(self, chain_metrics):
        graph = build_dependency_graph(chain_metrics)

        assert graph["a.ts"].dependencies == ["b.ts"]
        assert graph["b.ts"].dependencies == ["c.ts"]
        assert graph["c.ts"].dependents == ["b.ts"]
        assert graph["a.ts"].dependents == []
        assert graph.edge_count == 2

    def test_every_file_is_a_node(self):
        graph = build_dependency_graph(
            [("lonely.ts", StructuralMetrics()), ("other.ts", StructuralMetrics())]
        )
        assert set(graph) == {"lonely.ts", "other.ts"}
        assert graph.edge_count == 0

    def test_unresolved_imports_are_dropped(self):
        graph = build_dependency_graph(
            [("a.ts", StructuralMetrics(dependencies=["react", "./nowhere"]))]
        )
        assert graph["a.ts"].dependencies == []
        assert graph.unresolved_count == 2

    def test_duplicate_imports_add_duplicate_edges(self):
        graph = build_dependency_graph(
            [
                ("a.ts", StructuralMetrics(dependencies=["./b", "./b"])),
                ("b.ts", StructuralMetrics()),
            ]
        )
        assert graph["a.ts"].dependencies == ["b.ts", "b.ts"]
        assert graph["b.ts"].dependents == ["a.ts", "a.ts"]

    def test_edges_are_symmetric(self, chain_metrics):
        graph = build_dependency_graph(chain_metrics)
        for path in graph:
            for dep in graph[path].dependencies:
                assert path in graph[dep].dependents

    def test_to_dict(self, chain_metrics):
        data = build_dependency_graph(chain_metrics).to_dict()
        assert data["b.ts"]["dependencies"] == ["c.ts"]
        assert data["b.ts"]["dependents"] == ["a.ts"]


@pytest.mark.parametrize("dep", ["./b", "./b.ts", "./x/../b", ".//b"])
def test_equivalent_spellings_resolve_to_same_node(dep):
    assert resolve_dependency(dep, "a.ts", {"b.ts"}) == "b.ts"
