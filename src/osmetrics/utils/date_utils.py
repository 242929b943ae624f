from datetime import datetime, timezone
from typing import Optional


def parse_iso_date(date_str: str) -> Optional[datetime]:
    """
    Parses an ISO 8601 date string into a datetime object.
    Handles the 'Z' suffix by replacing it with '+00:00' for compatibility
    with datetime.fromisoformat() in older Python versions (pre-3.11).

    Args:
        date_str: The ISO date string to parse.

    Returns:
        A datetime object or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        # Handle Z suffix for UTC
        if date_str.endswith("Z"):
            date_str = date_str[:-1] + "+00:00"

        return datetime.fromisoformat(date_str)
    except ValueError:
        return None


def to_epoch_seconds(date_str: str) -> Optional[float]:
    """
    Converts an ISO 8601 string to (possibly fractional) seconds since the epoch.
    Naive timestamps are assumed to be UTC.
    """
    dt = parse_iso_date(date_str)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()
