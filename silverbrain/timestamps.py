"""Reading and writing timestamps as ISO 8601 text."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from silverbrain.service import ServiceError

_PATTERN = re.compile(
    r"(?P<year>[+-]\d{6}|\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?"
    r"(?P<offset>Z|[+-]\d{2}(?::?\d{2})?)"
)


def now_utc() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def _format_offset(offset: timedelta) -> str:
    if offset == timedelta(0):
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def to_iso8601(moment: datetime) -> str:
    """Format a moment with a six digit signed year and nanosecond precision.

    A moment without a time zone is taken to be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset() or timedelta(0)
    return (
        f"+{moment.year:06d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond * 1000:09d}{_format_offset(offset)}"
    )


def _parse_offset(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def from_iso8601(text: str) -> datetime:
    """Parse an ISO 8601 date and time with an offset, raising ServiceError if invalid."""
    match = _PATTERN.fullmatch(text)
    if match is None:
        raise ServiceError("Cannot convert string to date time")
    fraction = (match["fraction"] or "").ljust(6, "0")[:6]
    try:
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"] or 0),
            int(fraction),
            tzinfo=_parse_offset(match["offset"]),
        )
    except ValueError as error:
        raise ServiceError("Cannot convert string to date time") from error