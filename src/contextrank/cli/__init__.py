"""CLI entry point: registers all subcommands."""

import sys
from typing import Optional

import typer

app = typer.Typer(
    name="contextrank",
    help="contextrank - Importance-ranked codebase digests for LLM context windows",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .rank import rank as _rank  # noqa: F401, E402
from .init import examples as _examples, init as _init  # noqa: F401, E402

SUBCOMMANDS = ("rank", "init", "examples")


def main(argv: Optional[list] = None) -> None:
    """Console script entry point.

    ``contextrank PATH ...`` is shorthand for ``contextrank rank PATH ...``.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] not in SUBCOMMANDS and args[0] not in ("--help", "-h"):
        args.insert(0, "rank")
    app(args=args, prog_name="contextrank")
