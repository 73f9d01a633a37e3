"""Logging helpers for moneytrack.

Modules create loggers with ``get_logger(__name__)``. The CLI calls
``configure_logging`` once at startup; later calls only adjust the level,
so no duplicate handlers are attached when commands are invoked repeatedly
in the same process (as the test runner does).
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "moneytrack"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_handler: RichHandler | None = None


def configure_logging(level: str = "WARNING") -> None:
    """Attach a rich handler on stderr to the package logger.

    Args:
        level: Level name, one of LOG_LEVELS.
    """
    global _handler

    package_logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)
        _handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        package_logger.addHandler(_handler)
        package_logger.propagate = False

    package_logger.setLevel(level.upper())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module logger below the package logger."""
    return logging.getLogger(name or LOGGER_NAME)
