"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point plus small utilities used
throughout the code base to attach structured context to DEBUG events
without paying formatting costs when DEBUG is disabled.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

# Attributes present on every LogRecord; anything else came in via ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class HumanFormatter(logging.Formatter):
    """Plain formatter; appends structured context at DEBUG level only."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if record.levelno > logging.DEBUG:
            return base
        context = _record_context(record)
        if not context:
            return base
        pairs = " ".join(f"{k}={v}" for k, v in sorted(context.items()))
        return f"{base} [{pairs}]"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, structured context merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    Args:
        level: Level name; falls back to FINDDEPS_LOG_LEVEL, then INFO.
        log_format: "json" or "human"; falls back to FINDDEPS_LOG_FORMAT.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    fmt_name = (log_format or os.environ.get(Constants.ENV_LOG_FORMAT) or "human").lower()

    handler = logging.StreamHandler(sys.stderr)
    if fmt_name == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(HumanFormatter(Constants.LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping None values."""
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
