# tests/test_dates.py
from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.dates import meeting_date_key, month_bounds, month_key, parse_month_key, parse_timestamp


def test_month_bounds_cover_whole_month_in_utc():
    start, end = month_bounds(date(2025, 12, 15))

    assert start == datetime(2025, 12, 1, tzinfo=timezone.utc)
    assert end == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_month_bounds_february_leap_year():
    start, end = month_bounds(date(2024, 2, 29))

    assert end - start == timedelta(days=29)


def test_parse_month_key_valid():
    assert parse_month_key("2025-03") == date(2025, 3, 1)


@pytest.mark.parametrize("value", ["", "2025", "2025-13", "2025-00", "25-03", "2025-3", "abc"])
def test_parse_month_key_invalid(value):
    with pytest.raises(ValueError):
        parse_month_key(value)


def test_month_key_formats_year_month():
    assert month_key(date(2025, 1, 31)) == "2025-01"


def test_parse_timestamp_variants():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("nope") is None
    assert parse_timestamp(12345) is None
    assert parse_timestamp("2025-11-03T10:00:00Z") == datetime(2025, 11, 3, 10, tzinfo=timezone.utc)


def test_parse_timestamp_accepts_any_fraction_length():
    parsed = parse_timestamp("2025-11-03T19:30:00.12Z")

    assert parsed == datetime(2025, 11, 3, 19, 30, 0, 120000, tzinfo=timezone.utc)
    assert meeting_date_key("2025-11-03T23:59:59.1234+00:00") == "2025-11-03"


def test_meeting_date_key_converts_offsets_to_utc():
    ts = datetime(2025, 11, 4, 1, 0, tzinfo=timezone(timedelta(hours=7)))

    assert meeting_date_key(ts) == "2025-11-03"
