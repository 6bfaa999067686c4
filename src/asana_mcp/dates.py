"""Calendar helpers."""

from __future__ import annotations

from datetime import datetime


def today_string(now: datetime | None = None) -> str:
    """Return the current local date as YYYY-MM-DD."""
    now = now or datetime.now()
    return now.strftime("%Y-%m-%d")
