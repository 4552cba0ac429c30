"""Tests for the regex analysis strategies."""

from contextrank.analysis import GenericRegexStrategy, PythonRegexStrategy, StructuralMetrics

PYTHON_SOURCE = """\
import os
from pathlib import Path


class Loader:
    def load(self, path):
        if path and os.path.exists(path):
            return Path(path).read_text()
        return None


async def run():
    for item in range(3):
        pass


def main():
    return Loader()
"""

GO_SOURCE = """\
package main

import "fmt"

func main() {
\tif true {
\t\tfmt.Println("hi")
\t}
}
"""


class TestPythonRegexStrategy:
    """Test the Python line-oriented strategy."""

    def test_counts(self):
        metrics = PythonRegexStrategy().analyze("loader.py", PYTHON_SOURCE, StructuralMetrics())

        assert metrics.import_count == 2
        assert metrics.function_count == 1  # module-level def only
        assert metrics.class_count == 1
        assert metrics.complexity == 3  # if, and, for

    def test_dependencies_captured(self):
        metrics = PythonRegexStrategy().analyze("loader.py", PYTHON_SOURCE, StructuralMetrics())
        assert sorted(metrics.dependencies) == ["os", "pathlib"]

    def test_dotted_from_import(self):
        metrics = PythonRegexStrategy().analyze(
            "x.py", "from a.b.c import d\n", StructuralMetrics()
        )
        assert metrics.dependencies == ["a.b.c"]
        assert metrics.import_count == 0

    def test_methods_and_async_defs_not_counted(self):
        content = "class A:\n    def m(self):\n        pass\n\n\nasync def run():\n    pass\n"
        metrics = PythonRegexStrategy().analyze("a.py", content, StructuralMetrics())
        assert metrics.function_count == 0
        assert metrics.class_count == 1

    def test_nested_class_not_counted(self):
        content = "def outer():\n    class Inner:\n        pass\n"
        metrics = PythonRegexStrategy().analyze("a.py", content, StructuralMetrics())
        assert metrics.function_count == 1
        assert metrics.class_count == 0

    def test_empty_file(self):
        metrics = PythonRegexStrategy().analyze("empty.py", "", StructuralMetrics())
        assert metrics.import_count == 0
        assert metrics.function_count == 0
        assert metrics.class_count == 0
        assert metrics.complexity == 0
        assert metrics.dependencies == []

    def test_never_fails(self):
        assert PythonRegexStrategy().analyze("x.py", "def (((", StructuralMetrics()) is not None


class TestGenericRegexStrategy:
    """Test the language-agnostic fallback."""

    def test_go_source(self):
        metrics = GenericRegexStrategy().analyze("main.go", GO_SOURCE, StructuralMetrics())
        assert metrics.import_count == 1
        assert metrics.function_count == 1
        assert metrics.class_count == 0
        assert metrics.complexity == 1

    def test_overlapping_patterns_are_summed(self):
        """`function foo() {` matches both the keyword and the brace pattern."""
        metrics = GenericRegexStrategy().analyze(
            "a.js", "function foo() {\n}\n", StructuralMetrics()
        )
        assert metrics.function_count == 2

    def test_type_declarations(self):
        content = "struct Point {}\ntrait Shape {}\ninterface Named {}\nclass Thing {}\n"
        metrics = GenericRegexStrategy().analyze("x.rs", content, StructuralMetrics())
        assert metrics.class_count == 4

    def test_empty_file(self):
        metrics = GenericRegexStrategy().analyze("empty.txt", "", StructuralMetrics())
        assert metrics.import_count == 0
        assert metrics.function_count == 0
        assert metrics.class_count == 0
        assert metrics.complexity == 0

    def test_keeps_characteristics(self):
        template = StructuralMetrics(is_test_file=True, frameworks=["jest"])
        metrics = GenericRegexStrategy().analyze("x.test.rb", "x = 1", template.fresh())
        assert metrics.is_test_file
        assert metrics.frameworks == ["jest"]
