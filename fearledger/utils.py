"""Hashing, time and logging helpers."""

from __future__ import annotations

import hashlib
import logging
import math
import time
from datetime import datetime, timezone

_DISCOUNT_TAU_SECONDS = 86400.0

_LEVEL_NAMES = {
    logging.CRITICAL: "ERROR",
    logging.ERROR: "ERROR",
    logging.WARNING: "WARN",
    logging.INFO: "INFO",
}


def compute_sha256_hash(data: bytes) -> str:
    """Lowercase hex SHA-256 digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def sha256(text: str) -> str:
    """Lowercase hex SHA-256 digest of a UTF-8 string."""
    return compute_sha256_hash(text.encode("utf-8"))


def time_discount_factor(age_seconds: int | float) -> float:
    """Exponential decay exp(-age / tau) with tau of one day."""
    if age_seconds < 0:
        raise ValueError("age_seconds must not be negative")
    return math.exp(-age_seconds / _DISCOUNT_TAU_SECONDS)


def now_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def from_unix(secs: int) -> datetime:
    """UTC datetime for a Unix timestamp in seconds."""
    return datetime.fromtimestamp(secs, tz=timezone.utc)


class _ConsoleHandler(logging.Handler):
    """Prints '[LEVEL] message' lines to standard output."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _LEVEL_NAMES.get(record.levelno, record.levelname)
            print(f"[{level}] {record.getMessage()}")
        except Exception:
            self.handleError(record)


def init_logging() -> bool:
    """Install the console logger at INFO level.

    Returns True when installed, False when it was already in place.
    """
    root = logging.getLogger()
    if any(isinstance(h, _ConsoleHandler) for h in root.handlers):
        return False
    root.addHandler(_ConsoleHandler(level=logging.INFO))
    root.setLevel(logging.INFO)
    return True