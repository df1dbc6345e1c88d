"""Logging configuration for the Brancher CLI.

The library itself only creates module loggers; handlers are installed
here, by the command-line front end.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a Rich handler writing to stderr to the ``brancher`` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
    """
    logger = logging.getLogger("brancher")
    logger.setLevel(getattr(logging, level.upper()))

    # Repeated CLI invocations in one process must not stack handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(getattr(logging, level.upper()))
    logger.addHandler(console_handler)

    # Don't propagate to root logger
    logger.propagate = False
    return logger
