"""Centralised logging helpers for cssmodulize."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Union

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

ROOT_LOGGER = "cssmodulize"
LOG_LEVEL_ENV = "CSSMODULIZE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_level(level: Optional[Union[str, int]] = None) -> int:
    """Numeric level from an explicit value, ``CSSMODULIZE_LOG_LEVEL`` or ``warning``."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv(LOG_LEVEL_ENV, "warning")).lower()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Set the package log level and attach a single stream handler."""
    logger = get_logger(ROOT_LOGGER)
    logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False
    return logger


__all__ = ["configure_logging", "get_logger", "resolve_level", "LOG_LEVEL_ENV"]
