"""Calendar-day helper shared by check-in, quests and progress views."""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo


def local_day(timestamp: datetime, tz_name: str) -> date:
    """Calendar day of ``timestamp`` in ``tz_name``. Naive timestamps are taken as UTC."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(ZoneInfo(tz_name)).date()
