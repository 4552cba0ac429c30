"""Configuration loading and management for contextrank.

Configuration sources are merged in priority order:
    1. Defaults (defined in RankConfig)
    2. Global config (~/.contextrank.toml)
    3. Project config (./contextrank.toml)
    4. Explicit config file (--config)
    5. Environment variables (CONTEXTRANK_* prefix)
    6. CLI overrides (passed as kwargs)

Exclude patterns never replace the defaults: every source appends to
DEFAULT_EXCLUDE_PATTERNS.

Example:
    >>> config = load_config(use_ast_analysis=True)
    >>> config.use_ast_analysis
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ContextRankError, InvalidConfigError

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["markdown", "json"]
ScoringPolicy = Literal["additive", "legacy"]

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    "__pycache__/**",
    ".venv/**",
    "venv/**",
    "*.log",
    # Lock files
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "bun.lockb",
    "Pipfile.lock", "poetry.lock", "Cargo.lock", "composer.lock",
    "Gemfile.lock", "go.sum", "mix.lock",
    # Images and media
    "*.png", "*.jpg", "*.jpeg", "*.gif", "*.bmp", "*.tiff", "*.webp", "*.svg",
    "*.mp4", "*.avi", "*.mov", "*.wmv", "*.flv", "*.webm",
    "*.mp3", "*.wav", "*.ogg", "*.flac", "*.aac",
    # Documents and archives
    "*.pdf", "*.doc", "*.docx", "*.xls", "*.xlsx", "*.ppt", "*.pptx",
    "*.zip", "*.tar", "*.gz", "*.rar", "*.7z",
    # Executables and fonts
    "*.exe", "*.dmg", "*.app", "*.deb", "*.rpm",
    "*.ico", "*.ttf", "*.woff", "*.woff2", "*.eot",
)

DEFAULT_PRIORITIZE_FILES: tuple[str, ...] = (
    "README.md",
    "package.json",
    "requirements.txt",
    "main.py",
    "index.js",
)


@dataclass(frozen=True)
class RankConfig:
    """Configuration for one ranking run.

    Attributes:
        File discovery:
            include_hidden: Include dotfiles and dot-directories
            max_file_size: Skip files larger than this many bytes
            exclude_patterns: Glob patterns to exclude (merged with defaults)
            include_patterns: Glob patterns a file must match
            respect_gitignore: Apply the project's .gitignore

        Scoring:
            use_ast_analysis: Blend structural analysis into importance
            prioritize_files: Filename substrings boosted by the heuristic
            ast_weight: Weight of the structural score in the blend
            scoring_policy: "additive" (default) or the deprecated "legacy"
            centrality_damping: Damping factor of the centrality iteration
            centrality_iterations: Fixed iteration count

        Output:
            output_format: "markdown" or "json"
            include_metadata: Emit per-file metadata lines
            max_tokens: Token budget for the rendered document (None = no limit)
            verbosity: Logging verbosity level
    """

    # File discovery
    include_hidden: bool = False
    max_file_size: int = 1024 * 1024
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    include_patterns: tuple[str, ...] = ("**/*",)
    respect_gitignore: bool = True

    # Scoring
    use_ast_analysis: bool = False
    prioritize_files: tuple[str, ...] = DEFAULT_PRIORITIZE_FILES
    ast_weight: float = 0.7
    scoring_policy: ScoringPolicy = "additive"
    centrality_damping: float = 0.85
    centrality_iterations: int = 10

    # Output
    output_format: OutputFormat = "markdown"
    include_metadata: bool = True
    max_tokens: Optional[int] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_file_size <= 0:
            raise InvalidConfigError("max_file_size", self.max_file_size, "must be positive")
        if not 0.0 <= self.ast_weight <= 1.0:
            raise InvalidConfigError("ast_weight", self.ast_weight, "must be between 0.0 and 1.0")
        if not 0.0 <= self.centrality_damping <= 1.0:
            raise InvalidConfigError(
                "centrality_damping", self.centrality_damping, "must be between 0.0 and 1.0"
            )
        if self.centrality_iterations < 1:
            raise InvalidConfigError(
                "centrality_iterations", self.centrality_iterations, "must be at least 1"
            )
        if self.output_format not in ("markdown", "json"):
            raise InvalidConfigError("output_format", self.output_format, "expected markdown or json")
        if self.scoring_policy not in ("additive", "legacy"):
            raise InvalidConfigError(
                "scoring_policy", self.scoring_policy, "expected additive or legacy"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet, normal or verbose")
        if self.max_tokens is not None and self.max_tokens < 1:
            raise InvalidConfigError("max_tokens", self.max_tokens, "must be at least 1")
        if not self.include_patterns:
            raise InvalidConfigError("include_patterns", self.include_patterns, "must not be empty")

    @property
    def heuristic_weight(self) -> float:
        """Weight of the filename/content heuristic in the blend."""
        return 1.0 - self.ast_weight


DEFAULT_CONFIG = RankConfig()

# Fields that hold pattern lists: TOML arrays or comma separated strings.
_LIST_FIELDS = ("exclude_patterns", "include_patterns", "prioritize_files")


def load_config(config_file: Optional[Path] = None, **overrides) -> RankConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower layers.

    Returns:
        Validated RankConfig instance

    Raises:
        ContextRankError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}
    extra_excludes: list[str] = []

    def _merge(layer: dict[str, Any]) -> None:
        layer = dict(layer)
        excludes = layer.pop("exclude_patterns", None)
        if excludes:
            extra_excludes.extend(_as_pattern_list(excludes))
        merged.update(layer)

    global_config = Path.home() / ".contextrank.toml"
    if global_config.exists():
        try:
            _merge(_load_toml_file(global_config))
        except ContextRankError:
            raise
        except Exception as e:
            raise ContextRankError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "contextrank.toml"
    if project_config.exists():
        try:
            _merge(_load_toml_file(project_config))
        except ContextRankError:
            raise
        except Exception as e:
            raise ContextRankError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ContextRankError(f"Config file not found: {config_file}")
        try:
            _merge(_load_toml_file(config_file))
        except ContextRankError:
            raise
        except Exception as e:
            raise ContextRankError(f"Invalid config file '{config_file}': {e}")

    _merge(_load_env_vars())

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    _merge({k: v for k, v in overrides.items() if v is not None})

    for name in _LIST_FIELDS:
        if name in merged:
            merged[name] = tuple(_as_pattern_list(merged[name]))
    if extra_excludes:
        merged["exclude_patterns"] = DEFAULT_EXCLUDE_PATTERNS + tuple(
            p for p in extra_excludes if p not in DEFAULT_EXCLUDE_PATTERNS
        )

    known = {f.name for f in fields(RankConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ContextRankError(f"Invalid configuration: unknown option(s) {', '.join(unknown)}")

    return RankConfig(**merged)


def _as_pattern_list(value: Any) -> list[str]:
    """Accept a list/tuple of patterns or a comma separated string."""
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    return [str(p) for p in value]


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CONTEXTRANK_* environment variables.

    Supported environment variables (one per RankConfig field), e.g.:
        CONTEXTRANK_USE_AST_ANALYSIS: bool (true/false/1/0)
        CONTEXTRANK_MAX_FILE_SIZE: int
        CONTEXTRANK_MAX_TOKENS: int
        CONTEXTRANK_OUTPUT_FORMAT: markdown/json
        CONTEXTRANK_EXCLUDE_PATTERNS: comma separated globs

    Returns:
        Dict of field_name -> parsed_value for any CONTEXTRANK_* vars found.
    """
    type_hints = get_type_hints(RankConfig)

    result: dict[str, Any] = {}

    for f in fields(RankConfig):
        env_key = f"CONTEXTRANK_{f.name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        if f.name in _LIST_FIELDS:
            result[f.name] = _as_pattern_list(env_value)
            continue

        type_hint = type_hints.get(f.name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[f.name] = parsed
        except ValueError as e:
            raise ContextRankError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Accepts either top-level keys or a [contextrank] table.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ContextRankError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("contextrank")
    if isinstance(section, dict):
        return section
    return data


def render_default_toml() -> str:
    """TOML text for `contextrank init`."""

    def _fmt(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(f'"{v}"' for v in value) + "]"
        if isinstance(value, str):
            return f'"{value}"'
        return str(value)

    lines = ["[contextrank]"]
    for f in fields(RankConfig):
        value = getattr(DEFAULT_CONFIG, f.name)
        if value is None:
            continue
        if f.name == "exclude_patterns":
            # Defaults are always applied; list only project additions here.
            lines.append('# exclude_patterns = ["*.test.*", "coverage/**"]')
            lines.append("exclude_patterns = []")
            continue
        lines.append(f"{f.name} = {_fmt(value)}")
    return "\n".join(lines) + "\n"
