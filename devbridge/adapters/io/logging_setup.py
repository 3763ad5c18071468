"""
Logging setup with Rich integration.

Library modules only call ``logging.getLogger(__name__)``; the CLI (or an
embedding application) calls ``setup_logging`` once to route everything
through a single ``RichHandler`` on the root logger.
"""

import logging
import threading

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

DEVBRIDGE_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
    }
)


class LoggerManager:
    """Owns the root RichHandler so repeated setup stays idempotent."""

    _console: Console | None = None
    _handler: RichHandler | None = None
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls,
        console: Console | None = None,
        level: int = logging.INFO,
        rich_tracebacks: bool = True,
    ) -> RichHandler:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            root_logger = logging.getLogger()

            if cls._handler is not None and cls._handler in root_logger.handlers:
                # Already configured, just ensure correct level
                root_logger.setLevel(level)
                return cls._handler

            # Drop stray RichHandlers so output is not duplicated
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            cls._console = console or Console(theme=DEVBRIDGE_THEME, stderr=True)
            rich_handler = RichHandler(
                console=cls._console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=rich_tracebacks,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._handler = rich_handler
            return rich_handler

    @classmethod
    def reset(cls) -> None:
        """Remove the managed handler (used by tests)."""
        with cls._setup_lock:
            if cls._handler is not None:
                logging.getLogger().removeHandler(cls._handler)
            cls._handler = None
            cls._console = None


def setup_logging(
    level: int | str = logging.INFO,
    console: Console | None = None,
    rich_tracebacks: bool = True,
) -> logging.Logger:
    """Set up devbridge logging and return the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    LoggerManager.setup_global_logging(console, level, rich_tracebacks)
    return logging.getLogger("devbridge")
