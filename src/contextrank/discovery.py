"""Project file discovery: walk, filter, decode.

Produces the SourceFile batch the ranking pipeline consumes. Everything
that could make a file unsuitable (exclusion globs, .gitignore, size,
binary content, undecodable bytes) is dealt with here, so the pipeline
only ever sees UTF-8 text.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG, RankConfig
from .exceptions import FileAccessError, InvalidPathError
from .logging_config import get_logger
from .models import ProjectNode, SourceFile

logger = get_logger(__name__)

BINARY_EXTENSIONS = frozenset({
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tiff", ".webp", ".svg", ".ico",
    # Videos
    ".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".mkv",
    # Audio
    ".mp3", ".wav", ".ogg", ".flac", ".aac", ".m4a",
    # Archives
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Executables
    ".exe", ".dmg", ".app", ".deb", ".rpm", ".msi",
    # Fonts
    ".ttf", ".woff", ".woff2", ".eot", ".otf",
    # Other binary formats
    ".bin", ".dat", ".db", ".sqlite", ".sqlite3",
})

LANGUAGE_MAP = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".h": "c",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "zsh",
    ".fish": "fish",
    ".ps1": "powershell",
    ".sql": "sql",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
    ".xml": "xml",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".ini": "ini",
    ".cfg": "ini",
    ".conf": "ini",
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "text",
    ".dockerfile": "dockerfile",
    ".vue": "vue",
    ".svelte": "svelte",
}

# Characters that should not appear in text: C0 controls except \t \n \v \f \r, DEL.
_NON_PRINTABLE = re.compile(r"[\x00-\x08\x0E-\x1F\x7F]")
BINARY_CONTENT_RATIO = 0.3


def detect_language(path: str) -> str:
    """Language tag from the file extension; ``text`` when unknown."""
    name = Path(path).name.lower()
    if name == "dockerfile":
        return "dockerfile"
    return LANGUAGE_MAP.get(Path(path).suffix.lower(), "text")


@lru_cache(maxsize=512)
def _glob_to_regex(pattern: str) -> re.Pattern:
    """Translate a glob with ``**`` support into an anchored regex."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if ch == "*":
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("^" + "".join(out) + "$")


def matches_pattern(rel_path: str, pattern: str) -> bool:
    """Match a project-relative POSIX path against an exclude/include glob.

    ``dir/**`` matches that directory at any depth; patterns without a
    slash match the basename; anything else matches the whole path.
    """
    pattern = pattern.strip().lstrip("/")
    if not pattern:
        return False
    if pattern.endswith("/**") and "*" not in pattern[:-3]:
        base = pattern[:-3]
        return rel_path.startswith(base + "/") or f"/{base}/" in f"/{rel_path}"
    if "/" not in pattern:
        return bool(_glob_to_regex(pattern).match(rel_path.rsplit("/", 1)[-1]))
    return bool(_glob_to_regex(pattern).match(rel_path))


class GitIgnore:
    """Subset of .gitignore semantics: comments, anchors, directory rules.

    Negation rules are not supported and are skipped.
    """

    def __init__(self, patterns: list[str]):
        self.rules: list[tuple[str, bool, bool]] = []
        for raw in patterns:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("!"):
                logger.debug(f"Skipping unsupported .gitignore negation: {line}")
                continue
            dir_only = line.endswith("/")
            line = line.rstrip("/")
            anchored = "/" in line
            self.rules.append((line.lstrip("/"), anchored, dir_only))

    @classmethod
    def from_project(cls, root: Path) -> Optional[GitIgnore]:
        path = root / ".gitignore"
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {path}: {e}")
            return None
        return cls(text.splitlines())

    def ignores(self, rel_path: str, is_dir: bool = False) -> bool:
        parts = rel_path.split("/")
        for pattern, anchored, dir_only in self.rules:
            regex = _glob_to_regex(pattern)
            if anchored:
                # Match the path itself or any leading directory of it
                for depth in range(1, len(parts) + 1):
                    prefix = "/".join(parts[:depth])
                    prefix_is_dir = depth < len(parts) or is_dir
                    if regex.match(prefix) and (prefix_is_dir or not dir_only):
                        return True
            else:
                for depth, part in enumerate(parts, start=1):
                    part_is_dir = depth < len(parts) or is_dir
                    if regex.match(part) and (part_is_dir or not dir_only):
                        return True
        return False


def looks_binary(content: str) -> bool:
    """NUL bytes, or more than 30% control characters."""
    if "\0" in content:
        return True
    if not content:
        return False
    return len(_NON_PRINTABLE.findall(content)) / len(content) > BINARY_CONTENT_RATIO


class ProjectScanner:
    """Walks a project directory and yields SourceFile objects.

    Usage:
        scanner = ProjectScanner(Path("."), config)
        files = scanner.scan()
    """

    def __init__(self, root: Path, config: RankConfig = DEFAULT_CONFIG):
        root = Path(root)
        if not root.exists():
            raise InvalidPathError(root, "does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "is not a directory")
        self.root = root.resolve()
        self.config = config
        self.gitignore = GitIgnore.from_project(self.root) if config.respect_gitignore else None

    def is_excluded(self, rel_path: str, is_dir: bool = False) -> bool:
        name = rel_path.rsplit("/", 1)[-1]
        if name.startswith(".") and not self.config.include_hidden:
            return True
        if self.gitignore is not None and self.gitignore.ignores(rel_path, is_dir=is_dir):
            return True
        if is_dir:
            return any(matches_pattern(rel_path + "/", p) for p in self.config.exclude_patterns)
        return any(matches_pattern(rel_path, p) for p in self.config.exclude_patterns)

    def is_included(self, rel_path: str) -> bool:
        return any(
            pattern == "**/*" or matches_pattern(rel_path, pattern)
            for pattern in self.config.include_patterns
        )

    def _walk(self):
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = Path(dirpath).relative_to(self.root).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir
            dirnames[:] = sorted(
                d
                for d in dirnames
                if not self.is_excluded(f"{rel_dir}/{d}".lstrip("/"), is_dir=True)
            )
            for filename in sorted(filenames):
                yield f"{rel_dir}/{filename}".lstrip("/")

    def scan(self) -> list[SourceFile]:
        """Discover and decode all eligible files, in path order."""
        files: list[SourceFile] = []
        files_skipped = 0
        files_errored = 0

        for rel_path in self._walk():
            if self.is_excluded(rel_path) or not self.is_included(rel_path):
                files_skipped += 1
                continue

            if Path(rel_path).suffix.lower() in BINARY_EXTENSIONS:
                files_skipped += 1
                logger.debug(f"Skipped (binary extension): {rel_path}")
                continue

            full_path = self.root / rel_path
            try:
                size = full_path.stat().st_size
            except OSError as e:
                files_errored += 1
                logger.warning(f"Cannot stat {rel_path}: {e}")
                continue

            if size > self.config.max_file_size:
                files_skipped += 1
                logger.debug(f"Skipped (size): {rel_path} ({size} bytes)")
                continue

            try:
                content = read_text(full_path)
            except FileAccessError as e:
                files_skipped += 1
                logger.debug(f"Skipped (unreadable): {rel_path}: {e.reason}")
                continue

            if looks_binary(content):
                files_skipped += 1
                logger.debug(f"Skipped (binary content): {rel_path}")
                continue

            files.append(
                SourceFile(
                    path=rel_path,
                    content=content,
                    language=detect_language(rel_path),
                    size=size,
                )
            )

        files.sort(key=lambda f: f.path)
        logger.info(
            f"Discovery complete: {len(files)} files, {files_skipped} skipped, "
            f"{files_errored} errors"
        )
        return files

    def build_tree(self) -> ProjectNode:
        """Directory structure, directories first, alphabetical within a level."""

        def _build(directory: Path, rel: str) -> ProjectNode:
            node = ProjectNode(name=directory.name, path=rel, is_dir=True)
            try:
                entries = list(directory.iterdir())
            except OSError as e:
                logger.debug(f"Cannot list {directory}: {e}")
                return node
            for entry in entries:
                child_rel = f"{rel}/{entry.name}".lstrip("/")
                is_dir = entry.is_dir()
                if self.is_excluded(child_rel, is_dir=is_dir):
                    continue
                if is_dir:
                    node.children.append(_build(entry, child_rel))
                else:
                    node.children.append(ProjectNode(name=entry.name, path=child_rel, is_dir=False))
            node.children.sort(key=lambda n: (not n.is_dir, n.name))
            return node

        return _build(self.root, "")


def read_text(path: Path) -> str:
    """Read a file as strict UTF-8.

    Raises:
        FileAccessError: If the file cannot be read or is not UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileAccessError(path, f"not valid UTF-8: {e.reason}")
    except OSError as e:
        raise FileAccessError(path, f"Cannot read file: {e}")


def discover_files(root: Path, config: RankConfig = DEFAULT_CONFIG) -> list[SourceFile]:
    """Convenience wrapper around ProjectScanner.scan()."""
    return ProjectScanner(root, config).scan()


def build_project_tree(root: Path, config: RankConfig = DEFAULT_CONFIG) -> ProjectNode:
    return ProjectScanner(root, config).build_tree()
