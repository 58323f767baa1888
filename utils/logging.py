"""Logging setup shared by the insight pipeline and its CLI."""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _resolve_level(level: str | None) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    resolved = getattr(logging, level.upper(), None)
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a logger writing to stderr, leaving stdout free for JSON output."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(None))
    return logger


def set_log_level(level: str) -> None:
    """Apply a level (e.g. "DEBUG") to every logger created through get_logger."""
    resolved = _resolve_level(level)
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers:
            logger.setLevel(resolved)
