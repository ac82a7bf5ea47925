"""Utility helpers for clock and token-time arithmetic."""

from .time import current_token_time, issue_time_to_ms, now_ms, utc_now

__all__ = ["utc_now", "now_ms", "current_token_time", "issue_time_to_ms"]
