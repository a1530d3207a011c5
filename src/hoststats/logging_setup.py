"""Logging configuration for tmux-host-stats."""

import logging
import sys
from typing import Final, cast

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_NAME = "hoststats"


def resolve_log_level(level_name: str) -> int:
    """Map a level name such as "debug" to its logging constant."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return cast(int, level)


def configure_logging(level_name: str = "WARNING") -> logging.Logger:
    """
    Send hoststats logs to stderr.

    stdout carries only the status line, so no handler ever writes there.
    Calling this again only updates the level.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolve_log_level(level_name))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
