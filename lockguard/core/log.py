"""
LockGuard logging setup.

All modules log through ``logging.getLogger(__name__)``; this installs
the single console handler on the ``lockguard`` logger.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "lockguard"
LOG_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Initialise console logging for the current execution."""
    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(numeric_level)
    logger.propagate = False

    handler = logging.StreamHandler()
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger
