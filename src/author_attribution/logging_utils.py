"""Shared logging and console setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONSOLE = Console(stderr=True)


def get_console() -> Console:
    """Return the Rich console shared by log output and progress bars."""
    return _CONSOLE


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logging with a Rich handler.

    Call once at application start; repeated calls only adjust the level.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if any(isinstance(h, RichHandler) for h in root_logger.handlers):
        return

    handler = RichHandler(
        console=get_console(),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (normally called with __name__)."""
    return logging.getLogger(name)
