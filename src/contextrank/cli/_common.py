"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import RankConfig, load_config

# Status output goes to stderr; stdout carries the digest.
console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    output_format: Optional[str] = None,
    use_ast: Optional[bool] = None,
    max_size: Optional[int] = None,
    exclude: Optional[str] = None,
    include: Optional[str] = None,
    include_hidden: bool = False,
    metadata: Optional[bool] = None,
    max_tokens: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> RankConfig:
    """Build a RankConfig from CLI options."""
    overrides = {
        "output_format": output_format,
        "use_ast_analysis": use_ast,
        "max_file_size": max_size,
        "exclude_patterns": exclude,
        "include_patterns": include,
        "include_metadata": metadata,
        "max_tokens": max_tokens,
    }
    if include_hidden:
        overrides["include_hidden"] = True
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
