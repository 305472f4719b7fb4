"""
Instant normalization.

All comparisons in courseaccess happen on timezone-aware datetimes. This module
turns whatever the caller has (datetime, date, or a string) into such an
instant.

Rules:
- aware datetime   -> returned unchanged
- naive datetime   -> localized to the configured zone
- date / "YYYY-MM-DD" -> 00:00:00 of that day, or the last microsecond of that
  day when end_of_day=True (a period ending "2025-05-31" covers all of May 31st)
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional, Union

from courseaccess.config import default_timezone
from courseaccess.errors import InvalidInstantError

InstantLike = Union[datetime, date, str]

# Tried in order after datetime.fromisoformat() gives up.
_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
)
_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")


def _localize(dt: datetime, tz: Optional[tzinfo]) -> datetime:
    if dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None:
        return dt
    return dt.replace(tzinfo=tz if tz is not None else default_timezone())


def _day_bound(d: date, tz: Optional[tzinfo], end_of_day: bool) -> datetime:
    t = time.max if end_of_day else time.min
    return _localize(datetime.combine(d, t), tz)


def is_aware(dt: datetime) -> bool:
    return dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None


def parse_instant(text: str, *, tz: Optional[tzinfo] = None, end_of_day: bool = False) -> datetime:
    """
    Parse a timestamp string into an aware datetime.

    Accepts ISO 8601 (with or without offset, 'T' or space separator) and the
    dotted day-first format used in course listings ('15.05.2025 10:00').
    """
    raw = (text or "").strip()
    if not raw:
        raise InvalidInstantError("Empty timestamp")

    # Date-only first, so end_of_day can be honoured.
    for fmt in _DATE_FORMATS:
        try:
            d = datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
        return _day_bound(d, tz, end_of_day)

    iso = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        return _localize(datetime.fromisoformat(iso), tz)
    except ValueError:
        pass

    for fmt in _FORMATS:
        try:
            return _localize(datetime.strptime(raw, fmt), tz)
        except ValueError:
            continue

    raise InvalidInstantError(f"Invalid timestamp: {text!r}")


def to_instant(value: InstantLike, *, tz: Optional[tzinfo] = None, end_of_day: bool = False) -> datetime:
    """
    Normalize a datetime, date or string into a timezone-aware datetime.
    """
    if isinstance(value, datetime):
        return _localize(value, tz)
    if isinstance(value, date):
        return _day_bound(value, tz, end_of_day)
    if isinstance(value, str):
        return parse_instant(value, tz=tz, end_of_day=end_of_day)
    raise InvalidInstantError(f"Cannot convert {type(value).__name__} to an instant")
