"""
Logging configuration for contextrank.

Log records go to stderr through rich so they never mix with a digest
written to stdout. Every module logs under the ``contextrank`` namespace.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route contextrank's log records to stderr, and optionally to a file.

    The default level is WARNING, so a normal run only reports analysis
    fallbacks that affect ranking. ``verbose`` adds the per-file skip and
    parse-fallback messages from discovery and analysis.

    Args:
        verbose: Log at DEBUG and show source paths in each record
        quiet: Log errors only; wins over ``verbose``
        log_file: Also append plain-text records to this file

    Returns:
        The ``contextrank`` package logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    # Markup is off: file paths such as "src/[id].ts" must print verbatim
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    # force: repeated CLI invocations in one process replace earlier handlers
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("contextrank")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``contextrank`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; a bare name such as ``"discovery"`` is prefixed.
    """
    if name is None:
        return logging.getLogger("contextrank")

    if not name.startswith("contextrank"):
        name = f"contextrank.{name}"

    return logging.getLogger(name)
