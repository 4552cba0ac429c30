"""Tree-sitter parser wrapper.

Provides parsers for the two AST-backed languages: TypeScript (with its
TSX dialect) and JavaScript. Handles a missing tree-sitter install
gracefully, in which case every file goes through the regex strategies.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "typescript")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

# Try to import tree-sitter
TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_typescript

        _language_modules["typescript"] = tree_sitter_typescript
        # TSX is bundled with tree-sitter-typescript, store it separately
        _language_modules["tsx"] = tree_sitter_typescript
    except ImportError:
        pass

    try:
        import tree_sitter_javascript

        _language_modules["javascript"] = tree_sitter_javascript
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class Node:
        text: bytes | None
        type: str
        has_error: bool
        children: list[Node]
        parent: Node | None

        def child_by_field_name(self, name: str) -> Node | None: ...

    class Tree:
        root_node: Node


def get_supported_languages() -> list[str]:
    """Get list of grammars that are installed."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for the AST-backed grammars.

    Check TREE_SITTER_AVAILABLE before using, or check if parse() returns None.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, lang_module in _language_modules.items():
            try:
                # tree-sitter-typescript exposes language_typescript()/language_tsx()
                lang_fn = getattr(lang_module, f"language_{lang_name}", None)
                if lang_fn is None:
                    lang_fn = getattr(lang_module, "language", None)
                if lang_fn is None:
                    continue

                # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
                lang_obj = _tree_sitter_module.Language(lang_fn())
                self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            except Exception:
                # Grammar/binding version mismatch: leave the language unsupported
                pass

    def parse(self, code: bytes, grammar: str) -> Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            grammar: "typescript", "tsx" or "javascript"

        Returns:
            Tree object, or None if the grammar is not available
        """
        parser = self._parsers.get(grammar)
        if parser is None:
            return None
        result: Tree | None = parser.parse(code)
        return result

    def is_language_supported(self, grammar: str) -> bool:
        return grammar in self._parsers
