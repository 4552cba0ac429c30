"""Structural analysis strategies.

A strategy turns file content into StructuralMetrics or reports failure by
returning None. The analyzer tries an ordered list of strategies per
language and keeps the first result:

    TreeSitterStrategy   real syntax tree (TypeScript, TSX, JavaScript)
    PythonRegexStrategy  line-oriented regexes for Python
    GenericRegexStrategy language-agnostic pattern battery, never fails
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .metrics import StructuralMetrics
from .treesitter_parser import TreeSitterParser

logger = get_logger(__name__)

# Added once per function-like node. A function body is not re-walked for
# its own decision points; those are already counted by the file-level walk.
FUNCTION_BASE_COMPLEXITY = 1

IMPORT_NODES = frozenset({"import_statement"})
EXPORT_NODES = frozenset({"export_statement"})
FUNCTION_NODES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "generator_function",
    "arrow_function",
    "method_definition",
})
CLASS_NODES = frozenset({"class_declaration", "abstract_class_declaration", "class"})
INTERFACE_NODES = frozenset({"interface_declaration"})
TYPE_ALIAS_NODES = frozenset({"type_alias_declaration"})
BRANCH_NODES = frozenset({"if_statement", "switch_statement", "ternary_expression"})
LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
LOOP_NODES = frozenset({"for_statement", "for_in_statement", "while_statement", "do_statement"})
TRY_NODES = frozenset({"try_statement"})

_NAMED_DECLARATIONS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
})
_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})


class AnalysisStrategy:
    """One way of deriving StructuralMetrics from source text."""

    name = "base"

    def analyze(
        self, path: str, content: str, metrics: StructuralMetrics
    ) -> Optional[StructuralMetrics]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Tree-sitter
# ---------------------------------------------------------------------------


def _node_text(node: Any) -> str:
    text = getattr(node, "text", None)
    if not text:
        return ""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def _string_literal(node: Any) -> Optional[str]:
    """Value of a string node without its quotes."""
    if node is None:
        return None
    text = _node_text(node)
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text or None


def _field_text(node: Any, field_name: str) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    if child is None:
        return None
    return _node_text(child) or None


class TreeSitterStrategy(AnalysisStrategy):
    """Walks a tree-sitter syntax tree and dispatches on node type.

    ``typed`` enables the TypeScript-only rules: interface and type alias
    counting, and collecting exported/declared names into ``exports``.
    """

    def __init__(self, parser: Optional[TreeSitterParser], grammar: str, typed: bool):
        self.parser = parser
        self.grammar = grammar
        self.typed = typed
        self.name = f"tree-sitter:{grammar}"

    def analyze(
        self, path: str, content: str, metrics: StructuralMetrics
    ) -> Optional[StructuralMetrics]:
        try:
            root = self._parse(path, content)
        except ParsingError as e:
            logger.debug(f"{e.message}: {e.reason}")
            return None
        if root is None:
            return None

        self.walk(root, metrics)
        return metrics

    def _parse(self, path: str, content: str) -> Any:
        if self.parser is None or not self.parser.is_language_supported(self.grammar):
            return None
        try:
            tree = self.parser.parse(content.encode("utf-8"), self.grammar)
        except (ValueError, UnicodeEncodeError) as e:
            raise ParsingError(path, self.grammar, str(e))
        if tree is None:
            return None
        if tree.root_node.has_error:
            raise ParsingError(path, self.grammar, "syntax errors in parse tree")
        return tree.root_node

    def walk(self, root: Any, metrics: StructuralMetrics) -> StructuralMetrics:
        """Visit every node reachable through ``children``.

        Iterative, so deeply nested code cannot hit the recursion limit.
        Back-references such as ``parent`` are never followed. Anonymous
        nodes (keywords, punctuation) are stepped over; the ``function`` and
        ``class`` keywords share their type string with real node kinds.
        """
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_named:
                self._visit(node, metrics)
            children = getattr(node, "children", None) or ()
            stack.extend(reversed(children))
        return metrics

    def _visit(self, node: Any, metrics: StructuralMetrics) -> None:
        kind = node.type

        if kind in IMPORT_NODES:
            metrics.import_count += 1
            source = self._import_source(node)
            if source:
                metrics.dependencies.append(source)

        elif kind in EXPORT_NODES:
            metrics.export_count += 1
            if self.typed:
                declaration = node.child_by_field_name("declaration")
                if declaration is not None:
                    metrics.exports.extend(self._declared_names(declaration))

        elif kind in FUNCTION_NODES:
            metrics.function_count += 1
            metrics.complexity += FUNCTION_BASE_COMPLEXITY
            if kind == "method_definition" and self._is_public_method(node):
                metrics.public_methods += 1

        elif kind in CLASS_NODES:
            metrics.class_count += 1
            if self.typed:
                name = _field_text(node, "name")
                if name:
                    metrics.exports.append(name)

        elif kind in INTERFACE_NODES and self.typed:
            metrics.interface_count += 1
            name = _field_text(node, "name")
            if name:
                metrics.exports.append(name)

        elif kind in TYPE_ALIAS_NODES and self.typed:
            metrics.type_count += 1
            name = _field_text(node, "name")
            if name:
                metrics.exports.append(name)

        elif kind in BRANCH_NODES:
            metrics.complexity += 1

        elif kind == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is not None and operator.type in LOGICAL_OPERATORS:
                metrics.complexity += 1

        elif kind in LOOP_NODES:
            metrics.complexity += 2

        elif kind in TRY_NODES:
            metrics.complexity += 1
            if node.child_by_field_name("handler") is not None:
                metrics.complexity += 1

    @staticmethod
    def _import_source(node: Any) -> Optional[str]:
        source = node.child_by_field_name("source")
        if source is None:
            # TypeScript: import x = require("y")
            for child in node.children:
                if child.type == "import_require_clause":
                    source = child.child_by_field_name("source")
                    break
        return _string_literal(source)

    @staticmethod
    def _declared_names(declaration: Any) -> list[str]:
        if declaration.type in _NAMED_DECLARATIONS:
            name = _field_text(declaration, "name")
            return [name] if name else []
        if declaration.type in _VARIABLE_DECLARATIONS:
            names = []
            for child in declaration.children:
                if child.type != "variable_declarator":
                    continue
                ident = child.child_by_field_name("name")
                if ident is not None and ident.type == "identifier":
                    names.append(_node_text(ident))
            return names
        return []

    @staticmethod
    def _is_public_method(node: Any) -> bool:
        parent = getattr(node, "parent", None)
        if parent is None or parent.type != "class_body":
            return False
        for child in node.children:
            if child.type == "accessibility_modifier" and _node_text(child) in (
                "private",
                "protected",
            ):
                return False
        name = node.child_by_field_name("name")
        return name is None or name.type != "private_property_identifier"


# ---------------------------------------------------------------------------
# Regex strategies
# ---------------------------------------------------------------------------


def _count(patterns: tuple[re.Pattern, ...], content: str) -> int:
    return sum(len(pattern.findall(content)) for pattern in patterns)


class PythonRegexStrategy(AnalysisStrategy):
    """Python without a parser: import lines, defs, classes, keyword complexity.

    Only module-level ``def`` and ``class`` lines count; methods, nested and
    ``async`` functions do not. Dotted ``from a.b import`` lines are recorded
    as dependencies but not counted as imports.

    Complexity is a flat count of branching, looping, exception and boolean
    keywords; unlike the tree walk there is no per-construct weighting.
    """

    name = "regex:python"

    IMPORT_LINE = re.compile(r"^(?:import\s+\w+|from\s+\w+\s+import)", re.MULTILINE)
    FROM_IMPORT = re.compile(r"^from\s+(\w+(?:\.\w+)*)\s+import", re.MULTILINE)
    DIRECT_IMPORT = re.compile(r"^import\s+(\w+(?:\.\w+)*)", re.MULTILINE)
    FUNCTION = re.compile(r"^def\s+\w+\s*\(", re.MULTILINE)
    CLASS = re.compile(r"^class\s+\w+", re.MULTILINE)
    COMPLEXITY = tuple(
        re.compile(rf"\b{keyword}\b")
        for keyword in ("if", "elif", "else", "for", "while", "try", "except", "and", "or")
    )

    def analyze(
        self, path: str, content: str, metrics: StructuralMetrics
    ) -> Optional[StructuralMetrics]:
        metrics.import_count = len(self.IMPORT_LINE.findall(content))
        metrics.dependencies.extend(self.FROM_IMPORT.findall(content))
        metrics.dependencies.extend(self.DIRECT_IMPORT.findall(content))
        metrics.function_count = len(self.FUNCTION.findall(content))
        metrics.class_count = len(self.CLASS.findall(content))
        metrics.complexity += _count(self.COMPLEXITY, content)
        return metrics


class GenericRegexStrategy(AnalysisStrategy):
    """Language-agnostic fallback.

    Matches of overlapping patterns are summed as-is, so one construct may
    be counted twice. Never returns None.
    """

    name = "regex:generic"

    IMPORTS = tuple(
        re.compile(p, re.MULTILINE)
        for p in (
            r"^#include\s+",  # C/C++
            r"^import\s+",  # Java, Python, JavaScript
            r"^from\s+\w+\s+import",  # Python
            r"^use\s+",  # Rust
            r"^require\s*\(",  # Node.js
            r"^\s*@import",  # CSS
        )
    )
    FUNCTIONS = tuple(
        re.compile(p)
        for p in (
            r"\bfunction\s+\w+",  # JavaScript
            r"\bdef\s+\w+",  # Python
            r"\bfn\s+\w+",  # Rust
            r"\w+\s*\([^)]*\)\s*\{",  # C/C++/Java/Go
            r"\bpublic\s+\w+\s+\w+\s*\(",  # Java methods
        )
    )
    CLASSES = tuple(
        re.compile(p)
        for p in (
            r"\bclass\s+\w+",
            r"\bstruct\s+\w+",
            r"\binterface\s+\w+",
            r"\btrait\s+\w+",
        )
    )
    COMPLEXITY = tuple(
        re.compile(p)
        for p in (
            r"\bif\b", r"\belse\b", r"\belseif\b", r"\belif\b",
            r"\bfor\b", r"\bwhile\b", r"\bdo\b",
            r"\bswitch\b", r"\bmatch\b",
            r"\btry\b", r"\bcatch\b", r"\bexcept\b",
            r"\?.*:",  # ternary
            r"&&|\|\|",
        )
    )

    def analyze(
        self, path: str, content: str, metrics: StructuralMetrics
    ) -> Optional[StructuralMetrics]:
        metrics.import_count += _count(self.IMPORTS, content)
        metrics.function_count += _count(self.FUNCTIONS, content)
        metrics.class_count += _count(self.CLASSES, content)
        metrics.complexity += _count(self.COMPLEXITY, content)
        return metrics
