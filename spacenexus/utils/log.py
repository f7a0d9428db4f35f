"""Logging setup."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "spacenexus"


def setup_logging(
    level: str = "INFO",
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Safe to call more than once; only the level changes on later calls.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=rich_tracebacks,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
