"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import err_console


def configure_logging(verbose: bool = False) -> None:
    """Route `mailtmpl.*` loggers through rich on stderr."""
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("mailtmpl")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
