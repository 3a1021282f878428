"""Date parsing utilities."""

import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from churchbook.utils.time_utils import to_naive_utc

TIME_COMPONENT = re.compile(r"\d:\d|\dt\d")


def _relative_day(date_str: str) -> Optional[date]:
    """Resolve 'today', 'yesterday' and 'this/last month|year|week' to a date."""
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    return None


def _has_time_component(date_str: str) -> bool:
    return TIME_COMPONENT.search(date_str) is not None


def parse_datetime(date_str: str, end_of_day: bool = False) -> datetime:
    """Parse a date or datetime string into a naive UTC datetime.

    Supports:
    - ISO/RFC3339 timestamps: "2024-01-15T10:30:00Z", "2024-01-15 10:30+03:00"
    - Plain dates: "2024-01-15", "January 15, 2024"
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    A value without a time component resolves to midnight, or to the last
    microsecond of that day when ``end_of_day`` is set, so that date-only
    ranges are inclusive of the whole end day.

    Args:
        date_str: Date string in various formats
        end_of_day: Resolve date-only values to the end of the day

    Returns:
        Naive UTC datetime

    Raises:
        ValueError: If the string is empty or cannot be parsed
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")

    normalized = date_str.strip().lower()
    day = _relative_day(normalized)

    if day is None:
        if not _has_time_component(normalized):
            try:
                day = date_parser.parse(normalized).date()
            except (ValueError, OverflowError, TypeError) as e:
                raise ValueError(f"Could not parse date '{date_str}': {e}")
        else:
            try:
                return to_naive_utc(date_parser.isoparse(date_str.strip()))
            except (ValueError, OverflowError, TypeError):
                pass
            try:
                return to_naive_utc(date_parser.parse(date_str.strip()))
            except (ValueError, OverflowError, TypeError) as e:
                raise ValueError(f"Could not parse date '{date_str}': {e}")

    return datetime.combine(day, time.max if end_of_day else time.min)


def parse_date_range(
    start_str: Optional[str], end_str: Optional[str]
) -> tuple[datetime, datetime]:
    """Parse inclusive start/end bounds; both are required.

    Raises:
        ValueError: If either bound is missing or malformed
    """
    if not start_str or not end_str:
        raise ValueError("start_date and end_date are required")

    try:
        start = parse_datetime(start_str)
    except ValueError as e:
        raise ValueError(f"Invalid start_date: {e}")

    try:
        end = parse_datetime(end_str, end_of_day=True)
    except ValueError as e:
        raise ValueError(f"Invalid end_date: {e}")

    return start, end
