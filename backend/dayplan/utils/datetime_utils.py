"""
Timezone-aware datetime utilities.

This module provides utilities for working with timezone-aware datetimes,
ensuring consistent handling across the application.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc

MINUTES_PER_DAY = 24 * 60


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    # Already timezone-aware - convert to UTC
    return dt.astimezone(UTC)


def parse_time_to_minutes(value: str, allow_end_of_day: bool = False) -> Optional[int]:
    """
    Parse an "HH:MM" clock string into minutes since midnight.

    Returns None for anything that is not a valid clock time. "24:00" is
    accepted only when allow_end_of_day is set.
    """
    parts = value.split(":")
    if len(parts) != 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if allow_end_of_day and hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours < 0 or hours > 23 or minutes < 0 or minutes > 59:
        return None
    return hours * 60 + minutes


def day_minutes_to_utc(day: date, minutes: int, user_timezone: str) -> datetime:
    """
    Convert minutes since local midnight of `day` into a UTC instant.

    Example:
        >>> day_minutes_to_utc(date(2024, 1, 20), 9 * 60, "Asia/Tokyo")
        datetime(2024, 1, 20, 0, 0, tzinfo=timezone.utc)
    """
    tz = ZoneInfo(user_timezone)
    midnight = datetime.combine(day, time.min).replace(tzinfo=tz)
    return (midnight + timedelta(minutes=minutes)).astimezone(UTC)
