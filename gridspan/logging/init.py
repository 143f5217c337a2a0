from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Logging for gridspan: one stdout handler with labeled prefixes.

Lines look like ``INFO message`` / ``WARN message`` / ``SUMMARY ...``. Debug
lines also name the emitting module relative to the package
(``DEBUG core.span_tracker: ...``) since they come from deep inside an export.

Modules log through ``logging.getLogger(__name__)``; those loggers propagate
to the ``gridspan`` logger configured here.
"""

__all__ = [
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "enable_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "setup_logging",
]

LOGGER_NAME = "gridspan"

# Sits between INFO (20) and WARNING (30)
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        message = record.getMessage()
        if record.levelno == logging.DEBUG and record.name.startswith(LOGGER_NAME + "."):
            origin = record.name[len(LOGGER_NAME) + 1:]
            return f"{label} {origin}: {message}"
        return f"{label} {message}"


def _stdout_handler(stream: TextIO, level: int) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    return handler


def setup_logging(*, debug: bool = False) -> logging.Logger:
    """Configure the ``gridspan`` logger once and return it.

    Later calls return the same logger; pass ``debug=True`` or call
    ``enable_debug()`` to lower the level afterwards.
    """
    global _logger
    if _logger is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        logger = logging.getLogger(LOGGER_NAME)
        for old in list(logger.handlers):
            logger.removeHandler(old)
        logger.addHandler(_stdout_handler(sys.stdout, logging.INFO))
        logger.setLevel(logging.INFO)
        # Output goes to our handler only
        logger.propagate = False
        _logger = logger
    if debug:
        enable_debug()
    return _logger


def enable_debug() -> None:
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup starts fresh (tests)."""
    global _logger
    _logger = None
