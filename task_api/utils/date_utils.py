"""
Centralized date/time utilities
All stored and reported timestamps are timezone-aware UTC datetimes
"""

from datetime import datetime, timezone, timedelta
from typing import Optional

# Smallest step a datetime can represent
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


def get_current_datetime() -> datetime:
    """
    Get current datetime in UTC
    
    Returns:
        Current datetime object with UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC
    
    Naive datetimes are assumed to already be in UTC.
    
    Args:
        value: Datetime to normalize
        
    Returns:
        Timezone-aware UTC datetime
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Get a timestamp for a new write
    
    The result is the current time, bumped past ``previous`` when the clock
    has not advanced since it was taken.
    
    Args:
        previous: Timestamp of the previous write, if any
        
    Returns:
        Aware UTC datetime strictly greater than ``previous``
    """
    now = get_current_datetime()
    if previous is not None:
        previous = ensure_utc(previous)
        if now <= previous:
            return previous + TIMESTAMP_RESOLUTION
    return now


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp as produced by Firestore
    
    Firestore emits up to nanosecond precision ("2024-01-02T03:04:05.123456789Z");
    digits past microseconds are dropped.
    
    Args:
        value: Timestamp string
        
    Returns:
        Aware UTC datetime
        
    Raises:
        ValueError: If the string is not a valid timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    
    if "." in text:
        head, _, tail = text.partition(".")
        digits = ""
        for char in tail:
            if not char.isdigit():
                break
            digits += char
        offset = tail[len(digits):]
        text = f"{head}.{digits[:6].ljust(6, '0')}{offset}"
    
    return ensure_utc(datetime.fromisoformat(text))


def format_rfc3339(value: datetime) -> str:
    """
    Format a datetime for the Firestore REST API
    
    Args:
        value: Datetime to format
        
    Returns:
        UTC timestamp string with microsecond precision and a "Z" suffix
    """
    return ensure_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
