# core/datetime_utils.py
"""
Centralized date handling for OneFlow.

Streaks, "tasks done today" and leaderboard windows are all calendar-day
based, so every "today" in the code goes through here. Tests patch
`core.datetime_utils.today` to pin the date.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional

from django.utils import timezone


def now() -> datetime:
    """
    Get current datetime (local wall-clock time while USE_TZ=False).

    This is the single source of truth for "now" in OneFlow.
    """
    return timezone.now()


def today() -> date:
    """Current local calendar date."""
    return now().date()


def is_previous_day(earlier: Optional[date], later: date) -> bool:
    """True when `earlier` is exactly one calendar day before `later`."""
    if earlier is None:
        return False
    return later - earlier == timedelta(days=1)


def window_start(days: Optional[int]) -> Optional[datetime]:
    """
    Start of a trailing window of `days` calendar days, at local midnight.

    Returns None for an unbounded window.
    """
    if days is None:
        return None
    return datetime.combine(today() - timedelta(days=days), time.min)
