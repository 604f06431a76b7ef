"""
Training streaks over local calendar dates.

A date counts once no matter how many records fall on it. Only active records
count: any workout, and any day that has exercises or is marked as a rest day.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence

from ..models.records import TrainingRecord
from ..utils.dates import parse_record_date

logger = logging.getLogger(__name__)


def active_dates(records: Sequence[TrainingRecord], context: str = "streak") -> List[date]:
    """Unique local dates of active records, ascending. Invalid dates are skipped."""
    dates = set()
    for record in records:
        if not record.is_active:
            continue
        parsed = parse_record_date(record.date, context)
        if parsed is not None:
            dates.add(parsed)
    return sorted(dates)


def calculate_current_streak(
    records: Sequence[TrainingRecord],
    today: Optional[date] = None,
) -> int:
    """Count consecutive active days ending today.

    Walks dates newest first. A date equal to the expected date extends the
    streak and moves the expectation back one day; any gap ends it. Dates after
    today are ignored.

    Args:
        records: Workouts or days
        today: Reference date, defaults to the local current date

    Returns:
        Streak length; 0 when there was no activity today
    """
    today = today or date.today()
    expected = today
    streak = 0

    for day in reversed(active_dates(records, "current_streak")):
        gap = (expected - day).days
        if gap < 0:
            continue
        if gap > 0:
            break
        streak += 1
        expected -= timedelta(days=1)

    return streak


def calculate_longest_streak(records: Sequence[TrainingRecord]) -> int:
    """Longest run of consecutive active days anywhere in the history."""
    dates = active_dates(records, "longest_streak")
    if not dates:
        return 0

    longest = current = 1
    for previous, day in zip(dates, dates[1:]):
        if (day - previous).days == 1:
            current += 1
        else:
            current = 1
        longest = max(longest, current)

    return longest
