"""
models/_dates.py
----------------
Lenient date coercion shared by the models and the derived views.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a date-like value into a naive UTC datetime.

    Accepts ``datetime``, ``date`` and ISO 8601 strings. Anything that cannot
    be understood yields ``None`` instead of raising.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        # ISO only: free-form parsing would fill missing parts from today
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def to_date(value: Any) -> Optional[date]:
    """Like :func:`to_datetime` but drops the time component."""
    dt = to_datetime(value)
    return dt.date() if dt else None


def iso(value: Any) -> Optional[str]:
    """Serialize a date/datetime for JSON output, passing None through."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the store keeps naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
