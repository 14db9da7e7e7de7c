"""Presentation helpers for the notification bell."""

from __future__ import annotations

from datetime import datetime

from godservices.utils import elapsed_seconds, utc_now

BADGE_LIMIT = 9


def badge_label(unread_count: int) -> str | None:
    """Return the badge text, or ``None`` when the badge should be hidden."""

    if unread_count <= 0:
        return None
    if unread_count > BADGE_LIMIT:
        return f"{BADGE_LIMIT}+"
    return str(unread_count)


def time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """Format ``timestamp`` relative to ``now`` (``"5m ago"``)."""

    seconds = elapsed_seconds(timestamp, now or utc_now())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


__all__ = ["BADGE_LIMIT", "badge_label", "time_ago"]
