"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module only
installs the root handler once and provides the small helpers used for
structured DEBUG traces (``extra_context``, ``is_debug_enabled``, ``Timer``).
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONFIGURED_ATTR = "_webjars_configured"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a stream handler on the root logger (idempotent).

    The level comes from ``level`` when given, else from the
    ``WEBJARS_LOG_LEVEL`` environment variable, else INFO.
    """
    root = logging.getLogger()
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    if not getattr(root, _CONFIGURED_ATTR, False):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
        setattr(root, _CONFIGURED_ATTR, True)
    root.setLevel(level_value)


def add_file_handler(path: str) -> logging.Handler:
    """Mirror log records into ``path``."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records on ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload for structured log records.

    ``None`` values are dropped so records only carry what is known.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Milliseconds elapsed; reads the running clock inside the block."""
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
