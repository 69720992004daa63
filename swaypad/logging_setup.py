"""Logging setup.

Everything goes to stderr so that ``--dry-run`` and ``--list`` output on
stdout stays clean. Colors follow the usual ``NO_COLOR`` / ``FORCE_COLOR``
conventions and are disabled when stderr is not a terminal.
"""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "should_colorize",
]

_ESC = "\x1b["
_RESET = f"{_ESC}0m"

# (level, ANSI codes)
_LEVEL_STYLES = {
    logging.WARNING: "33;2",
    logging.ERROR: "31;2",
    logging.CRITICAL: "31;1",
}


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = bool(os.environ.get("DEBUG"))


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    Args:
        stream: The output stream to check. Defaults to sys.stderr.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """Formatter for the terminal, coloring warnings and errors."""

    def __init__(self, colors: bool) -> None:
        super().__init__()
        log_format = r"%(name)12s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        self._formatters = {}
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            style = _LEVEL_STYLES.get(level) if colors else None
            fmt = f"{_ESC}{style}m{log_format}{_RESET}" if style else log_format
            self._formatters[level] = logging.Formatter(fmt)

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._formatters.get(record.levelno, self._formatters[logging.INFO])
        return formatter.format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Safe to call more than once: previously installed handlers are replaced.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    for handler in LogObjects.handlers:
        handler.close()
    LogObjects.handlers.clear()

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(ScreenLogFormatter(should_colorize(sys.stderr)))
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "swaypad", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name: logger's name
        level: logger's level (auto if not set)
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in LogObjects.handlers:
        logger.addHandler(handler)
    return logger
