"""
Timezone-aware date and datetime helpers for the CASA volunteer tracker.

Timestamps are stored in UTC. Calendar questions ("did the volunteer make
contact in the last 14 days?") are answered in the organization's local
time zone, so a contact logged late in the evening still counts for the
local day it happened on.
"""

from datetime import datetime, date, timezone, timedelta
from typing import Optional, Tuple
import pytz

DEFAULT_TIMEZONE = 'America/New_York'


def utc_now() -> datetime:
    """
    Get the current UTC time as a timezone-aware datetime object.

    Returns:
        datetime: Current UTC time with timezone information
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware and in UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def utc_to_local(dt: datetime, local_tz: str = DEFAULT_TIMEZONE) -> datetime:
    """
    Convert a UTC datetime to a local timezone.

    Args:
        dt: UTC datetime (naive values are treated as UTC)
        local_tz: Target timezone name

    Returns:
        datetime: Datetime in the specified local timezone
    """
    return ensure_utc(dt).astimezone(pytz.timezone(local_tz))


def local_today(local_tz: str = DEFAULT_TIMEZONE) -> date:
    """
    Get today's calendar date in the given timezone.

    Example:
        >>> local_today('America/Los_Angeles')
        datetime.date(2025, 1, 1)
    """
    return utc_to_local(utc_now(), local_tz).date()


def trailing_date_window(days: int, today: Optional[date] = None,
                         local_tz: str = DEFAULT_TIMEZONE) -> Tuple[date, date]:
    """
    Inclusive window of calendar dates ending today.

    Args:
        days: How many days back the window starts
        today: Anchor date (defaults to local_today(local_tz))
        local_tz: Timezone used when today is not given

    Returns:
        (start, end) where start == end - days
    """
    end = today or local_today(local_tz)
    return end - timedelta(days=days), end
