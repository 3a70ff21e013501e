"""Logging helper: console logger with the same format everywhere."""

from __future__ import annotations

import logging
import os

DEFAULT_LEVEL = logging.INFO


def resolve_level(name) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else DEFAULT_LEVEL


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(resolve_level(os.environ.get("HUBSEND_LOG_LEVEL")))
    return logger
