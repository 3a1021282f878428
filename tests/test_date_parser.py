"""Tests for date parsing and UTC helpers."""

import pytest
from datetime import date, datetime, time, timedelta, timezone

from churchbook.utils.date_parser import parse_datetime, parse_date_range
from churchbook.utils.time_utils import to_naive_utc, to_utc_z, utcnow


def test_parse_iso_date():
    """Test parsing a plain ISO date."""
    assert parse_datetime("2024-01-15") == datetime(2024, 1, 15)


def test_parse_date_end_of_day():
    """Test that a date-only value can resolve to the end of the day."""
    assert parse_datetime("2024-01-15", end_of_day=True) == datetime.combine(date(2024, 1, 15), time.max)


def test_parse_rfc3339_with_z():
    """Test parsing a UTC timestamp with a Z suffix."""
    assert parse_datetime("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30)


def test_parse_timestamp_with_offset():
    """Test that offsets are converted to naive UTC."""
    assert parse_datetime("2024-01-15T10:30:00+03:00") == datetime(2024, 1, 15, 7, 30)


def test_parse_naive_timestamp_kept_as_utc():
    assert parse_datetime("2024-01-15 10:30") == datetime(2024, 1, 15, 10, 30)


def test_parse_timestamp_ignores_end_of_day():
    """Test that an explicit time is never moved to end of day."""
    assert parse_datetime("2024-01-15T10:30:00Z", end_of_day=True) == datetime(2024, 1, 15, 10, 30)


def test_parse_natural_language_date():
    assert parse_datetime("January 15, 2024") == datetime(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_datetime("today") == datetime.combine(date.today(), time.min)


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    expected = datetime.combine(date.today() - timedelta(days=1), time.min)
    assert parse_datetime("Yesterday") == expected


def test_parse_this_month():
    """Test parsing 'this month'."""
    assert parse_datetime("this month") == datetime.combine(date.today().replace(day=1), time.min)


def test_parse_this_year():
    assert parse_datetime("this year") == datetime.combine(date.today().replace(month=1, day=1), time.min)


def test_parse_last_week_is_a_monday():
    assert parse_datetime("last week").weekday() == 0


def test_parse_invalid_date():
    """Test parsing invalid date raises error."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_datetime("not a date")


def test_parse_empty_date():
    with pytest.raises(ValueError):
        parse_datetime("   ")


def test_parse_date_range_inclusive_of_end_day():
    """Test that a date-only end bound covers the whole day."""
    start, end = parse_date_range("2024-01-01", "2024-01-31")

    assert start == datetime(2024, 1, 1)
    assert end.date() == date(2024, 1, 31)
    assert end.time() == time.max


def test_parse_date_range_requires_both():
    with pytest.raises(ValueError, match="required"):
        parse_date_range("2024-01-01", None)


def test_parse_date_range_reports_bad_bound():
    with pytest.raises(ValueError, match="Invalid end_date"):
        parse_date_range("2024-01-01", "garbage")


def test_to_naive_utc():
    """Test converting aware datetimes to naive UTC."""
    eat = timezone(timedelta(hours=3))
    assert to_naive_utc(datetime(2024, 1, 1, 3, 0, tzinfo=eat)) == datetime(2024, 1, 1, 0, 0)
    assert to_naive_utc(datetime(2024, 1, 1, 3, 0)) == datetime(2024, 1, 1, 3, 0)


def test_to_utc_z():
    assert to_utc_z(datetime(2024, 1, 1, 9, 5)) == "2024-01-01T09:05:00Z"
    assert to_utc_z(None) is None


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None
