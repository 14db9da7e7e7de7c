"""Utility helpers for reusable functionality."""

from .datetime import elapsed_seconds, ensure_utc, parse_timestamp, utc_now

__all__ = [
    "elapsed_seconds",
    "ensure_utc",
    "parse_timestamp",
    "utc_now",
]
