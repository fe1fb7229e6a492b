"""
Date parsing and formatting utilities.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a date string into a date object.

    Handles various formats:
    - ISO format (YYYY-MM-DD)
    - ISO datetime (YYYY-MM-DDTHH:MM:SS), time part is dropped

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date object or None if invalid
    """
    if not date_str:
        return None

    # Take only date part if it's a datetime string
    if 'T' in date_str:
        date_str = date_str.split('T')[0]

    try:
        return datetime.strptime(date_str.strip(), '%Y-%m-%d').date()
    except ValueError:
        pass

    try:
        # Single digit month/day
        parts = date_str.split('-')
        if len(parts) == 3:
            return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except (ValueError, IndexError):
        pass

    return None


def format_date(d: Optional[date]) -> Optional[str]:
    """Format a date object as ISO string (YYYY-MM-DD)."""
    if not d:
        return None

    return d.strftime('%Y-%m-%d')


def parse_timestamp(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """Parse a modification timestamp from an ISO string or datetime object.

    A trailing ``Z`` is accepted as UTC.

    Returns:
        datetime object if parsing succeeds, None otherwise
    """
    if not value:
        return None

    if isinstance(value, datetime):
        return value

    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        return None


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_after(first: datetime, second: datetime) -> bool:
    """Return True when ``first`` is strictly later than ``second``.

    Mixed naive/aware timestamps are compared after normalising both to UTC,
    so equal instants never count as "after".
    """
    return _as_utc(first) > _as_utc(second)


def dates_equal(date1: Optional[date], date2: Optional[date]) -> bool:
    """Null-safe exact date comparison: two missing dates are equal."""
    if date1 is None or date2 is None:
        return date1 is None and date2 is None
    return date1 == date2
