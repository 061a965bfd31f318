"""Logging setup for expensetrack."""

import logging
import sys

LOGGER_NAME = "expensetrack"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int | str = logging.WARNING, stream=None) -> None:
    """Install a single stream handler on the package logger.

    Repeated calls replace the handler, so it always writes to the current
    ``sys.stderr`` (the click test runner swaps it per invocation).

    Args:
        level: Logging level or level name (e.g. "INFO")
        stream: Target stream, defaults to ``sys.stderr``
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        if getattr(existing, "_expensetrack_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._expensetrack_handler = True
    logger.addHandler(handler)
