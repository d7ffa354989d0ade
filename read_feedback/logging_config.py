"""Logging setup for read_feedback.

``configure_logging`` is idempotent: the API entry point and tests may call
it any number of times and only one handler is attached.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional, Union

from . import config

LOGGER_NAME = "read_feedback"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LOCK = Lock()
_CONFIGURED = False


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger and return it.

    Args:
        level: Logging level name or number (default: READ_FEEDBACK_LOG_LEVEL)

    Returns:
        The ``read_feedback`` logger
    """
    global _CONFIGURED

    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    with _LOCK:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(level)
        if not _CONFIGURED:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
            _CONFIGURED = True
        return logger
