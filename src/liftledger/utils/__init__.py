"""Utility helpers."""

from .dates import (
    format_local_date,
    parse_local_date,
    parse_record_date,
    to_local_date_string,
    shift_months,
    week_start,
    bucket_for,
    days_between,
)

__all__ = [
    "format_local_date",
    "parse_local_date",
    "parse_record_date",
    "to_local_date_string",
    "shift_months",
    "week_start",
    "bucket_for",
    "days_between",
]
