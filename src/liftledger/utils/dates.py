"""Local-calendar date helpers.

Records are dated by the local calendar day they were logged on, stored as
YYYY-MM-DD strings. Everything here works on `datetime.date` values so that
streak and period arithmetic never crosses a timezone boundary.
"""

import calendar
import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_local_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def parse_local_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string, returning None when it is not one."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_record_date(value: Any, context: str) -> Optional[date]:
    """Parse a record date, logging and returning None when it is invalid.

    Args:
        value: The stored date value
        context: Name of the calling operation, used in the log line
    """
    parsed = parse_local_date(value)
    if parsed is None:
        logger.warning(f"[{context}] Invalid date: {value!r}")
    return parsed


def to_local_date_string(value: Any) -> str:
    """Normalize a date-like value to a local YYYY-MM-DD string.

    Accepts `date`, `datetime` (aware values are converted to local time),
    YYYY-MM-DD strings, other ISO-8601 strings and exported timestamp
    mappings such as `{"seconds": 1700000000, "nanoseconds": 0}`.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return format_local_date(value.date())
    if isinstance(value, date):
        return format_local_date(value)
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            try:
                stamp = datetime.fromtimestamp(seconds)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError(f"Timestamp out of range: {value!r}") from e
            return format_local_date(stamp.date())
        raise ValueError(f"Unsupported timestamp mapping: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if _DATE_PATTERN.match(text):
            if parse_local_date(text) is None:
                raise ValueError(f"Invalid calendar date: {value!r}")
            return text
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Unparseable date: {value!r}")
        return to_local_date_string(parsed)
    raise ValueError(f"Unsupported date value: {value!r}")


def shift_months(value: date, months: int) -> date:
    """Move a date by whole calendar months, clamping the day to the month length."""
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def week_start(value: date) -> date:
    """ISO week start (Monday) for a date."""
    return value - timedelta(days=value.weekday())


def bucket_for(value: date, period: str) -> Tuple[str, date]:
    """Bucket key and bucket start date for a trend period.

    week -> ISO week start date, month -> YYYY-MM, year -> YYYY,
    anything else -> the exact date.
    """
    if period == "week":
        start = week_start(value)
        return format_local_date(start), start
    if period == "month":
        return f"{value.year:04d}-{value.month:02d}", date(value.year, value.month, 1)
    if period == "year":
        return f"{value.year:04d}", date(value.year, 1, 1)
    return format_local_date(value), value


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from `earlier` to `later`."""
    return (later - earlier).days
