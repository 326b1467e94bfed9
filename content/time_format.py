"""Coarse human-readable ages for content listings."""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored on records."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_time_ago(created_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Format how long ago a timestamp was.

    Under an hour is "Just now", then whole hours, "Yesterday", whole days
    up to a week, and a locale date beyond that.
    """
    if now is None:
        now = datetime.now(timezone.utc) if created_at.tzinfo else utcnow()

    diff_hours = int((now - created_at).total_seconds() // 3600)

    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours} hour{'s' if diff_hours > 1 else ''} ago"
    if diff_hours < 48:
        return "Yesterday"
    if diff_hours < 168:
        return f"{diff_hours // 24} days ago"

    return created_at.strftime("%x")
