# app/core/dates.py
from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from pydantic import TypeAdapter, ValidationError

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
_DATETIME_ADAPTER = TypeAdapter(datetime)


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to UTC. Naive values are read as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: object) -> Optional[datetime]:
    """
    Best-effort conversion of a raw timestamp into an aware UTC datetime.

    Returns None for missing or unparsable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            parsed = _DATETIME_ADAPTER.validate_python(raw)
        except ValidationError:
            return None
        return to_utc(parsed)
    return None


def meeting_date_key(timestamp: object) -> Optional[str]:
    """
    Calendar date (UTC) of a submission as `YYYY-MM-DD`, or None when the
    timestamp cannot be interpreted.
    """
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return None
    return parsed.date().isoformat()


def first_of_month(month: date) -> date:
    """
    Truncate a date (or datetime) to the first day of its month.
    """
    if not isinstance(month, date):
        raise ValueError(f"month must be a date, got {type(month).__name__}")
    if isinstance(month, datetime):
        month = to_utc(month).date()
    return month.replace(day=1)


def month_key(month: date) -> str:
    """
    `YYYY-MM` key for the month containing `month`.
    """
    return first_of_month(month).strftime("%Y-%m")


def parse_month_key(value: str) -> date:
    """
    Parse a `YYYY-MM` string into the first day of that month.

    Raises ValueError for malformed input.
    """
    match = _MONTH_KEY_RE.match((value or "").strip())
    if match is None:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{value}', month must be 01-12")
    return date(year, month, 1)


def month_bounds(month: date) -> Tuple[datetime, datetime]:
    """
    Half-open UTC range [start, end) covering the whole month.
    """
    start_day = first_of_month(month)
    next_month = (start_day + timedelta(days=32)).replace(day=1)
    start = datetime(start_day.year, start_day.month, 1, tzinfo=timezone.utc)
    end = datetime(next_month.year, next_month.month, 1, tzinfo=timezone.utc)
    return start, end
