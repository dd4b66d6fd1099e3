"""Utility modules for mailtmpl."""

from .console import console, err_console
from .log import configure_logging
from .text import pluralize, pluralize_with_number

__all__ = [
    "console",
    "err_console",
    "configure_logging",
    "pluralize",
    "pluralize_with_number",
]
