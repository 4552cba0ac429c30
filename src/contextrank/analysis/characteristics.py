"""File characteristic detection: frameworks, entry points, tests, configs.

Everything here is plain substring / regex matching on the path and raw
content. It runs for every file regardless of language or which analysis
strategy later succeeds.
"""

from __future__ import annotations

import posixpath
import re

# (tag, substrings) in reporting order. Tiers: frontend, backend, testing,
# build tools, ORMs.
FRAMEWORK_VOCABULARY: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("react", ("react", "React", "jsx")),
    ("vue", ("vue", "Vue")),
    ("angular", ("angular", "Angular", "@angular")),
    ("svelte", ("svelte", "Svelte")),
    ("express", ("express", "Express")),
    ("fastify", ("fastify", "Fastify")),
    ("koa", ("koa", "Koa")),
    ("nestjs", ("nestjs", "@nestjs")),
    ("jest", ("jest", "Jest")),
    ("mocha", ("mocha", "Mocha")),
    ("cypress", ("cypress", "Cypress")),
    ("webpack", ("webpack", "Webpack")),
    ("vite", ("vite", "Vite")),
    ("mongoose", ("mongoose", "Mongoose")),
    ("prisma", ("prisma", "Prisma")),
    ("typeorm", ("typeorm", "TypeORM")),
)

FRONTEND_FRAMEWORKS = frozenset({"react", "vue", "angular"})
BACKEND_FRAMEWORKS = frozenset({"express", "fastify", "nestjs"})

ENTRY_POINT_FILENAMES = frozenset({
    "main.js", "main.ts", "index.js", "index.ts",
    "app.js", "app.ts", "server.js", "server.ts",
})

MAIN_INVOCATION_MARKERS = (
    "function main(",
    "const main =",
    "app.listen(",
    "server.listen(",
    'if __name__ == "__main__"',
)

TEST_DIRECTORIES = frozenset({"test", "tests", "__tests__"})

# Bare substrings, not tokens: a string literal containing "expect(" is
# reported as a test file too.
TEST_CONTENT_MARKERS = (
    "describe(",
    "it(",
    "test(",
    "expect(",
    "assert(",
    "beforeEach(",
    "afterEach(",
)

CONFIG_FILENAME_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\.(config|rc)\.(js|ts|json|yml|yaml)$",
        r"^(webpack|babel|eslint|prettier|jest|tsconfig|vite|rollup|tailwind)\.config\.",
        r"^\..*rc(\.|$)",
        r"^(package|composer|cargo|requirements)\.json$",
        r"^requirements\.txt$",
        r"^dockerfile$",
        r"^docker-compose\.",
        r"^\.env",
    )
)

CONFIG_TOOL_NAMES = ("webpack", "babel", "eslint", "prettier", "jest", "tsconfig", "vite", "rollup")


def detect_frameworks(content: str) -> list[str]:
    """All framework tags whose vocabulary occurs in ``content``."""
    return [
        tag
        for tag, needles in FRAMEWORK_VOCABULARY
        if any(needle in content for needle in needles)
    ]


def _basename(path: str) -> str:
    return posixpath.basename(path.replace("\\", "/")).lower()


def is_entry_point(path: str, content: str) -> bool:
    if _basename(path) in ENTRY_POINT_FILENAMES:
        return True
    return any(marker in content for marker in MAIN_INVOCATION_MARKERS)


def is_test_file(path: str, content: str) -> bool:
    name = _basename(path)
    if "test" in name or "spec" in name:
        return True

    directories = path.replace("\\", "/").split("/")[:-1]
    if any(part.lower() in TEST_DIRECTORIES for part in directories):
        return True

    return any(marker in content for marker in TEST_CONTENT_MARKERS)


def is_config_file(path: str) -> bool:
    name = _basename(path)
    if any(pattern.search(name) for pattern in CONFIG_FILENAME_PATTERNS):
        return True
    return any(tool in name for tool in CONFIG_TOOL_NAMES)
