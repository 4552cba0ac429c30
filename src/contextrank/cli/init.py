"""Helper commands: config scaffolding and usage examples."""

from pathlib import Path

import typer

from ..config import render_default_toml
from . import app
from ._common import console

CONFIG_FILENAME = "contextrank.toml"

EXAMPLES = (
    ("Basic digest", "contextrank ./my-project"),
    ("Save to file", "contextrank ./my-project -o project-docs.md"),
    ("JSON output", "contextrank ./my-project -f json -o project.json"),
    ("Structural ranking", "contextrank ./my-project --ast"),
    ("Include hidden files", "contextrank ./my-project --include-hidden"),
    ("Custom exclusions", 'contextrank ./my-project --exclude "*.test.js,coverage/**"'),
    ("Larger file limit", "contextrank ./my-project --max-size 2097152"),
    ("Fit a context window", "contextrank ./my-project --max-tokens 128000"),
)


@app.command()
def init(
    directory: Path = typer.Option(
        Path("."),
        "-C",
        "--directory",
        help="Where to write contextrank.toml",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Create a contextrank.toml with the default settings."""
    target = directory / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists[/yellow] (use --force to overwrite)")
        raise typer.Exit(1)
    target.write_text(render_default_toml(), encoding="utf-8")
    console.print(f"[green]Created {target}[/green]")


@app.command()
def examples():
    """Show usage examples."""
    console.print("[blue]contextrank usage examples:[/blue]\n")
    for title, command in EXAMPLES:
        console.print(f"[yellow]{title}:[/yellow]")
        console.print(f"  [dim]{command}[/dim]\n")
