"""Utility functions for churchbook."""

from churchbook.utils.date_parser import parse_datetime, parse_date_range
from churchbook.utils.time_utils import utcnow, to_naive_utc, to_utc_z

__all__ = ["parse_datetime", "parse_date_range", "utcnow", "to_naive_utc", "to_utc_z"]
