"""Shared date/time helpers."""
import re
from datetime import date, datetime, timezone
from typing import Union

from dateutil import parser as dateparser

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)

# Go-style zero instant; treated as "no date" by verification.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Return ``dt`` in UTC. Naive datetimes are assumed to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_rfc3339(dt: datetime) -> str:
    """Format a datetime like ``2012-12-21T08:30:15Z`` or ``...T08:30:15+02:00``.

    Naive datetimes are assumed UTC. Sub-second precision is dropped.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    offset = dt.utcoffset()
    stamp = dt.strftime("%Y-%m-%dT%H:%M:%S")
    if not offset:
        return stamp + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{stamp}{sign}{hours:02d}:{minutes:02d}"


def parse_rfc3339(value: str) -> datetime:
    """Strictly parse an RFC 3339 date-time. Raises ValueError on invalid input."""
    if not _RFC3339.match(value):
        raise ValueError(f"{value!r} is not an RFC 3339 date-time")
    try:
        return dateparser.isoparse(value.upper())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"{value!r} is not a valid date-time: {e}")


def parse_datetime(value: Union[str, date, datetime]) -> datetime:
    """Leniently coerce a definition-file value into an aware datetime.

    Accepts datetimes (YAML timestamps), dates (midnight UTC) and
    ISO 8601 strings. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            dt = dateparser.isoparse(value.strip())
        except ValueError as e:
            raise ValueError(f"Invalid date '{value}': {e}")
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    raise ValueError(f"Invalid date {value!r}: expected a date, datetime or ISO 8601 string")
