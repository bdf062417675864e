"""Shared utility functions."""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as dateparser

logger = logging.getLogger(__name__)

# Shorter digit strings are compact dates ("20240101") or years, not epochs
EPOCH_MIN_DIGITS = 9


def to_utc(value) -> Optional[datetime]:
    """Normalize a timestamp into an aware UTC datetime.

    Accepts:
      - datetime objects (naive values are taken as UTC)
      - epoch seconds as int, float or a string of at least 9 digits
      - date strings understood by dateutil (ISO-8601, RFC 822, ...)

    Returns None for anything that cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        # YAML loads bare dates as date objects
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if stripped.isdecimal() and len(stripped) >= EPOCH_MIN_DIGITS:
            return to_utc(int(stripped))
        try:
            dt = dateparser.parse(stripped)
        except (ValueError, OverflowError) as e:
            logger.debug(f"[Utils] Unparseable timestamp {stripped!r}: {e}")
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def rfc3339(dt: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC string with second precision."""
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def relative_time(dt: datetime) -> str:
    """Return a human-friendly relative time string like '2h ago'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    diff = datetime.now(timezone.utc) - dt
    seconds = int(diff.total_seconds())
    if seconds < 0:
        return "just now"
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    weeks = days // 7
    return f"{weeks}w ago"
