"""Main command: rank a project and render the digest."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.table import Table

from ..exceptions import ContextRankError
from ..logging_config import setup_logging
from ..pipeline import digest_project
from ..render import render_json, render_markdown
from ..tokens import TokenAnalysis, analyze_token_usage, estimate_tokens
from . import app
from ._common import console, resolve_config


@app.command()
def rank(
    path: Path = typer.Argument(
        ...,
        help="Path to the codebase to convert",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Output file path (default: stdout)",
        dir_okay=False,
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "-f",
        "--format",
        help="Output format: markdown or json",
        click_type=click.Choice(["markdown", "json"], case_sensitive=False),
    ),
    use_ast: Optional[bool] = typer.Option(
        None,
        "--ast/--no-ast",
        help="Blend structural analysis and dependency centrality into the ranking",
    ),
    max_size: Optional[int] = typer.Option(
        None,
        "--max-size",
        help="Maximum file size in bytes",
        min=1,
    ),
    exclude: Optional[str] = typer.Option(
        None,
        "--exclude",
        help="Comma-separated exclude patterns (added to the defaults)",
    ),
    include: Optional[str] = typer.Option(
        None,
        "--include",
        help="Comma-separated include patterns",
    ),
    include_hidden: bool = typer.Option(
        False,
        "--include-hidden",
        help="Include hidden files and directories",
    ),
    metadata: Optional[bool] = typer.Option(
        None,
        "--metadata/--no-metadata",
        help="Include per-file metadata in the output",
    ),
    max_tokens: Optional[int] = typer.Option(
        None,
        "--max-tokens",
        help="Drop the least important files once the digest reaches this many tokens",
        min=1,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print the digest and errors",
    ),
):
    """
    Rank every file of a project by importance and render one digest.

    [bold cyan]Examples:[/bold cyan]

      contextrank ./my-project

      contextrank ./my-project --ast -o digest.md

      contextrank ./my-project -f json --max-tokens 100000
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            output_format=output_format.lower() if output_format else None,
            use_ast=use_ast,
            max_size=max_size,
            exclude=exclude,
            include=include,
            include_hidden=include_hidden,
            metadata=metadata,
            max_tokens=max_tokens,
            verbose=verbose,
            quiet=quiet,
        )

        if not quiet:
            console.print(f"[blue]Analyzing[/blue] {path}")

        digest = digest_project(path, settings)

        if settings.output_format == "json":
            text = render_json(digest, settings.include_metadata, settings.max_tokens)
        else:
            text = render_markdown(digest, settings.include_metadata, settings.max_tokens)

        if output is not None:
            output.write_text(text, encoding="utf-8")
            if not quiet:
                console.print(f"[green]Output saved to:[/green] {output}")
        else:
            typer.echo(text)

        if not quiet:
            size_kb = len(text.encode("utf-8")) / 1024
            console.print(
                f"[blue]Generated {len(text.splitlines())} lines ({size_kb:.2f} KB) "
                f"from {len(digest.files)} files[/blue]"
            )
            _print_token_analysis(analyze_token_usage(estimate_tokens(text)))

    except typer.Exit:
        raise

    except ContextRankError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Ranking interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during ranking")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _print_token_analysis(analysis: TokenAnalysis) -> None:
    console.print(f"\n[bold]Estimated tokens:[/bold] {analysis.estimated_tokens:,}")

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Model")
    table.add_column("Provider", style="dim")
    table.add_column("Context", justify="right")
    table.add_column("Fit", justify="right")

    for model in analysis.compatible[:5]:
        pct = round(analysis.estimated_tokens / model.max_tokens * 100)
        table.add_row(model.name, model.provider, f"{model.max_tokens:,}", f"[green]{pct}%[/green]")
    for model in analysis.incompatible[:3]:
        overflow = analysis.estimated_tokens - model.max_tokens
        table.add_row(
            model.name, model.provider, f"{model.max_tokens:,}", f"[red]+{overflow:,}[/red]"
        )
    console.print(table)

    for rec in analysis.recommendations:
        console.print(f"  [dim]{rec}[/dim]")
