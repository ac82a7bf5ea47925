"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from ..constants import TOKENIZE_EPOCH


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Return milliseconds since the Unix epoch."""
    return int(utc_now().timestamp() * 1000)


def current_token_time() -> int:
    """Return whole seconds elapsed since ``TOKENIZE_EPOCH``."""
    delta = now_ms() - TOKENIZE_EPOCH
    # Truncate toward zero, not toward negative infinity.
    if delta < 0:
        return -(-delta // 1000)
    return delta // 1000


def issue_time_to_ms(issue_time: int) -> int:
    """Convert a token issue time back to milliseconds since the Unix epoch."""
    return issue_time * 1000 + TOKENIZE_EPOCH
