"""Logging setup and utilities."""

import logging
import os

from .styles import LEVEL_CODES, level_format, use_color

__all__ = [
    "VERBOSE",
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "parse_level",
    "set_file",
    "set_level",
    "set_stdout",
]

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

# Numeric levels accepted by the `log level` command, quietest last
NUMERIC_LEVELS = (VERBOSE, logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    loggers: list[logging.Logger] = []
    stream_handler: logging.Handler | None = None
    file_handler: logging.Handler | None = None
    level: int | None = None
    debug: bool = bool(os.environ.get("CMDNEST_DEBUG") or os.environ.get("DEBUG"))


def is_debug() -> bool:
    """Tell whether debug output was requested, by the environment or by `init_logger`."""
    return LogObjects.debug


class ScreenLogFormatter(logging.Formatter):
    """A custom formatter, adding colors based on log level.

    Respects NO_COLOR environment variable and TTY detection.
    """

    def __init__(self) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        color = use_color()
        self._plain = logging.Formatter(log_format)
        self._formatters = {level: logging.Formatter(level_format(level, log_format, color)) for level in LEVEL_CODES}

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._plain).format(record)


def _attach(handler: logging.Handler) -> None:
    """Register a handler and add it to every known logger."""
    LogObjects.handlers.append(handler)
    for logger in LogObjects.loggers:
        logger.addHandler(handler)


def _detach(handler: logging.Handler) -> None:
    """Remove a handler from every known logger."""
    if handler in LogObjects.handlers:
        LogObjects.handlers.remove(handler)
    for logger in LogObjects.loggers:
        logger.removeHandler(handler)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        LogObjects.debug = True
        if LogObjects.level is None:
            for logger in LogObjects.loggers:
                logger.setLevel(logging.DEBUG)

    for handler in list(LogObjects.handlers):
        _detach(handler)
    if LogObjects.file_handler is not None:
        LogObjects.file_handler.close()
    LogObjects.file_handler = None
    LogObjects.stream_handler = None

    if filename:
        set_file(filename)
    set_stdout(True)


def get_logger(name: str = "cmdnest", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        level = LogObjects.level
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    if logger not in LogObjects.loggers:
        LogObjects.loggers.append(logger)
    logger.info('Logger "%s" initialized', name)
    return logger


def parse_level(value: str) -> int | None:
    """Convert a user supplied level to a logging level.

    Args:
        value: Either an index into NUMERIC_LEVELS ("0".."5") or a level name

    Returns:
        The logging level, or None if the value is not understood
    """
    value = value.strip()
    try:
        index = int(value, 0)
    except ValueError:
        level = logging.getLevelName(value.upper())
        return level if isinstance(level, int) else None
    if 0 <= index < len(NUMERIC_LEVELS):
        return NUMERIC_LEVELS[index]
    return None


def set_level(level: int) -> None:
    """Change the level of every logger, including the ones created later.

    Args:
        level: The new logging level
    """
    LogObjects.level = level
    for logger in LogObjects.loggers:
        logger.setLevel(level)


def set_stdout(enabled: bool) -> None:
    """Enable or disable logging to the screen.

    Args:
        enabled: Whether the screen handler should be attached
    """
    if enabled and LogObjects.stream_handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(ScreenLogFormatter())
        LogObjects.stream_handler = handler
        _attach(handler)
    elif not enabled and LogObjects.stream_handler is not None:
        _detach(LogObjects.stream_handler)
        LogObjects.stream_handler = None


def set_file(filename: str) -> None:
    """Send log records to a new file, closing the previous one.

    Args:
        filename: Path of the log file, an empty string disables file logging

    Raises:
        OSError: If the file cannot be opened
    """
    handler = None
    if filename:
        handler = logging.FileHandler(filename)
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
    if LogObjects.file_handler is not None:
        _detach(LogObjects.file_handler)
        LogObjects.file_handler.close()
    LogObjects.file_handler = handler
    if handler is not None:
        _attach(handler)
