"""Logging configuration for the Rehearsal Review API."""

import logging
import sys

from rehearsal.core.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL

    Returns:
        The configured "rehearsal" logger
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    resolved = logging.getLevelName(level_name)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logger = logging.getLogger("rehearsal")
    logger.setLevel(resolved)

    # Remove existing handlers so reloads don't duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
