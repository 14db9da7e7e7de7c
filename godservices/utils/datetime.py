"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in UTC.

    Naive values are assumed to already be UTC, which is how Appwrite
    reports its ``$createdAt``/``$updatedAt`` attributes.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an Appwrite timestamp into an aware datetime.

    Accepts ISO 8601 strings (``2024-05-01T10:00:00.000+00:00``), unix epoch
    numbers and ``datetime`` instances. Anything else yields ``None``.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def elapsed_seconds(since: datetime, now: datetime) -> int:
    """Return the whole seconds elapsed between ``since`` and ``now``."""

    delta = ensure_utc(now) - ensure_utc(since)
    return int(delta.total_seconds() // 1)


__all__ = ["elapsed_seconds", "ensure_utc", "parse_timestamp", "utc_now"]
