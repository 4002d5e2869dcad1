from __future__ import annotations

from rich.console import Console
from rich.logging import RichHandler
import logging

_console = Console()
_err_console = Console(stderr=True)

def get_logger(name: str = "whichport") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = RichHandler(console=_err_console, show_time=True, show_level=True, show_path=False)
        formatter = logging.Formatter("%(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger

def set_level(level: int) -> None:
    """Apply ``level`` to every whichport logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("whichport") and isinstance(logger, logging.Logger):
            logger.setLevel(level)

def console() -> Console:
    return _console

def err_console() -> Console:
    return _err_console
