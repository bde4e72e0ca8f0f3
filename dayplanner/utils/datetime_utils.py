"""
Timezone-aware datetime utilities.

This module provides utilities for working with timezone-aware datetimes,
ensuring consistent handling across the planner.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def parse_time_of_day(value: str) -> Optional[tuple[int, int]]:
    """
    Parse an "HH:MM" string.

    Returns:
        (hours, minutes), or None when the value is not a valid time of day
    """
    parts = value.split(":")
    if len(parts) != 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if hours < 0 or hours > 23 or minutes < 0 or minutes > 59:
        return None
    return hours, minutes


def parse_iso_datetime(iso_string: str, default_timezone: str) -> datetime:
    """
    Parse an ISO datetime string into a timezone-aware datetime.

    Handles a 'Z' suffix and explicit offsets; naive strings are interpreted
    in default_timezone.

    Raises:
        ValueError: If the string cannot be parsed
    """
    normalized = iso_string.replace("Z", "+00:00")
    return ensure_timezone(datetime.fromisoformat(normalized), default_timezone)


def ensure_timezone(dt: Optional[datetime], user_timezone: str) -> Optional[datetime]:
    """
    Attach user_timezone to a naive datetime; aware datetimes pass through.

    Args:
        dt: datetime to localize (can be None, naive, or timezone-aware)
        user_timezone: IANA timezone name

    Returns:
        Optional[datetime]: timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo(user_timezone))
    return dt


def resolve_day_boundary(day: date, value: str, user_timezone: str) -> datetime:
    """
    Resolve a working-hours boundary to an absolute UTC timestamp.

    "HH:MM" values are placed on the given day in the user's timezone.
    Values containing a 'T' are already full timestamps (naive ones are read
    in the user's timezone).

    Example:
        >>> resolve_day_boundary(date(2024, 5, 6), "09:00", "Europe/Rome")
        datetime(2024, 5, 6, 7, 0, tzinfo=timezone.utc)
    """
    if "T" in value:
        return to_utc(parse_iso_datetime(value, user_timezone))
    parsed = parse_time_of_day(value)
    if parsed is None:
        raise ValueError(f"Invalid time of day: {value}")
    hours, minutes = parsed
    local = datetime(day.year, day.month, day.day, hours, minutes, tzinfo=ZoneInfo(user_timezone))
    return to_utc(local)


def to_utc(dt: datetime) -> datetime:
    """
    Convert an aware datetime to UTC; naive values pass through.

    Arithmetic between datetimes sharing a ZoneInfo is wall-clock, so all
    minute math runs on UTC values.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC)


def add_minutes(dt: datetime, minutes: float) -> datetime:
    """Shift a datetime by a number of elapsed minutes (result in UTC when aware)."""
    return to_utc(dt) + timedelta(minutes=minutes)


def duration_minutes(start: datetime, end: datetime) -> int:
    """Whole elapsed minutes from start to end, never negative."""
    return max(0, int((to_utc(end) - to_utc(start)).total_seconds() // 60))
