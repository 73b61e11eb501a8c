"""Logging setup for command-line entry points."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(name: str, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure a logger that writes through rich to stderr.

    Calling it again for the same name replaces the previous handler,
    so repeated CLI invocations in one process do not duplicate output.

    Args:
        name: Logger name (usually a package name)
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
