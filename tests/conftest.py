"""Shared test fixtures for contextrank tests."""

import os
from pathlib import Path

import pytest

from contextrank.analysis import StructuralMetrics
from contextrank.models import SourceFile

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files and CONTEXTRANK_* vars out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("CONTEXTRANK_"):
            monkeypatch.delenv(key)
    work = tmp_path / "cwd"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def sample_project_dir():
    """Small mixed TypeScript/Python project on disk."""
    return FIXTURES_DIR / "sample_project"


@pytest.fixture
def make_project(tmp_path):
    """Write a {relative path: content} mapping under a fresh directory."""

    def _make(files: dict, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def chain_files():
    """a.ts -> b.ts -> c.ts, as source files."""
    return [
        SourceFile.from_text("a.ts", "import { b } from './b';\nexport const a = b;\n", "typescript"),
        SourceFile.from_text("b.ts", "import { c } from './c';\nexport const b = c;\n", "typescript"),
        SourceFile.from_text("c.ts", "export const c = 1;\n", "typescript"),
    ]


@pytest.fixture
def chain_metrics():
    """(path, metrics) pairs for the chain a -> b -> c."""
    return [
        ("a.ts", StructuralMetrics(dependencies=["./b"])),
        ("b.ts", StructuralMetrics(dependencies=["./c"])),
        ("c.ts", StructuralMetrics()),
    ]
