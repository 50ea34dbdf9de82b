"""
Logging configuration for AI Notes.

All output goes through loguru. Records from the standard ``logging`` module
(Flask's werkzeug server, httpx, SQLAlchemy) are forwarded into the same
sinks so provider calls and request handling share one log.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger as _logger

from ai_notes.config import get_config

# Libraries that log every request at INFO
NOISY_LIBRARIES = ("httpx", "httpcore", "werkzeug")


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_stdlib_logging(
    level: str = "INFO",
    quiet: Iterable[str] = NOISY_LIBRARIES,
) -> None:
    """Route the root ``logging`` logger into loguru.

    Args:
        level: Minimum level forwarded from the standard library
        quiet: Logger names raised to WARNING
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: Optional[str] = None,
    retention: Optional[str] = None,
    format: Optional[str] = None,
) -> None:
    """Configure loguru sinks from the logging config, with overrides.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, etc.)
        log_file: Path to log file
        rotation: Log rotation setting (e.g., "100 MB", "1 day")
        retention: Log retention setting (e.g., "30 days", "1 week")
        format: Log format string
    """
    log_config = get_config().logging

    level = (level or log_config.level).upper()
    log_file = log_file or log_config.file_path
    format = format or log_config.format

    _logger.remove()

    if log_config.console_enabled:
        _logger.add(
            sys.stderr,
            format=format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_config.file_enabled:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        _logger.add(
            log_file,
            format=format,
            level=level,
            rotation=rotation or log_config.rotation,
            retention=retention or log_config.retention,
            compression="zip",
            encoding="utf-8",
            enqueue=True,  # Flask worker threads share the file sink
            backtrace=True,
            diagnose=False,
        )

    intercept_stdlib_logging(level)


def get_logger(name: Optional[str] = None):
    """Get a logger, bound to ``name`` when given.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    if name:
        return _logger.bind(name=name)
    return _logger


def debug(msg: str, *args, **kwargs):
    _logger.opt(depth=1).debug(msg, *args, **kwargs)


def info(msg: str, *args, **kwargs):
    _logger.opt(depth=1).info(msg, *args, **kwargs)


def warning(msg: str, *args, **kwargs):
    _logger.opt(depth=1).warning(msg, *args, **kwargs)


def error(msg: str, *args, **kwargs):
    _logger.opt(depth=1).error(msg, *args, **kwargs)


def exception(msg: str, *args, **kwargs):
    """Log an error with the active exception's traceback."""
    _logger.opt(depth=1, exception=True).error(msg, *args, **kwargs)


logger = _logger

__all__ = [
    "setup_logger",
    "intercept_stdlib_logging",
    "InterceptHandler",
    "get_logger",
    "logger",
    "debug",
    "info",
    "warning",
    "error",
    "exception",
]
