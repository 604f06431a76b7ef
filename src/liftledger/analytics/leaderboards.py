"""
Leaderboards: rank users by volume, cardio distance or consistency.

Callers pass records already grouped by user. Equal values share a rank and the next distinct value takes its position number,
so [100, 100, 80] ranks as [1, 1, 3].
"""

import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from ..models.leaderboard import (
    LEADERBOARD_PERIOD_DAYS,
    LeaderboardEntry,
    LeaderboardMetric,
    LeaderboardTimePeriod,
)
from ..models.records import TrainingRecord
from ..utils.dates import parse_record_date
from .aggregation import calculate_total_cardio_distance, calculate_total_volume
from .streaks import active_dates

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=TrainingRecord)

RecordsByUser = Mapping[str, Sequence[TrainingRecord]]


def rank_entries(values_by_user: Mapping[str, float]) -> List[LeaderboardEntry]:
    """Sort users by value descending and assign ranks.

    Users with equal values keep their input order and share a rank.
    """
    ordered = sorted(values_by_user.items(), key=lambda item: item[1], reverse=True)
    entries: List[LeaderboardEntry] = []
    for index, (user_id, value) in enumerate(ordered):
        if entries and entries[-1].value == value:
            rank = entries[-1].rank
        else:
            rank = index + 1
        entries.append(LeaderboardEntry(user_id=user_id, value=value, rank=rank))
    return entries


def filter_records_by_leaderboard_period(
    records: Sequence[R],
    period: Union[LeaderboardTimePeriod, str],
    today: Optional[date] = None,
) -> List[R]:
    """Keep records inside a leaderboard window.

    `7days` and `30days` keep records dated on or after today minus N days;
    `all` keeps everything. Records with invalid dates are dropped.
    """
    period = LeaderboardTimePeriod(period)
    if period == LeaderboardTimePeriod.ALL:
        return list(records)

    cutoff = (today or date.today()) - timedelta(days=LEADERBOARD_PERIOD_DAYS[period])
    kept = []
    for record in records:
        parsed = parse_record_date(record.date, "leaderboard")
        if parsed is not None and parsed >= cutoff:
            kept.append(record)
    return kept


def _count_active_days(records: Sequence[TrainingRecord]) -> int:
    return len(active_dates(records, "consistency"))


_METRIC_VALUES: Dict[LeaderboardMetric, Callable[[Sequence[TrainingRecord]], float]] = {
    LeaderboardMetric.VOLUME: calculate_total_volume,
    LeaderboardMetric.CARDIO_DISTANCE: calculate_total_cardio_distance,
    LeaderboardMetric.CONSISTENCY: _count_active_days,
}


def get_leaderboard(
    records_by_user: RecordsByUser,
    metric: Union[LeaderboardMetric, str],
    period: Union[LeaderboardTimePeriod, str] = LeaderboardTimePeriod.ALL,
    today: Optional[date] = None,
) -> List[LeaderboardEntry]:
    """Rank users by a metric over a leaderboard window.

    Args:
        records_by_user: Each user's workouts or days
        metric: volume, distance or consistency
        period: 7days, 30days or all
        today: Reference date, defaults to the local current date

    Raises:
        ValueError: If the metric or period is unknown
    """
    value_of = _METRIC_VALUES[LeaderboardMetric(metric)]
    values = {
        user_id: value_of(filter_records_by_leaderboard_period(records, period, today))
        for user_id, records in records_by_user.items()
    }
    logger.debug(f"Ranked {len(values)} user(s) by {LeaderboardMetric(metric).value}")
    return rank_entries(values)


def get_volume_leaderboard(
    records_by_user: RecordsByUser,
    period: Union[LeaderboardTimePeriod, str] = LeaderboardTimePeriod.ALL,
    today: Optional[date] = None,
) -> List[LeaderboardEntry]:
    """Rank users by total strength volume."""
    return get_leaderboard(records_by_user, LeaderboardMetric.VOLUME, period, today)


def get_cardio_distance_leaderboard(
    records_by_user: RecordsByUser,
    period: Union[LeaderboardTimePeriod, str] = LeaderboardTimePeriod.ALL,
    today: Optional[date] = None,
) -> List[LeaderboardEntry]:
    """Rank users by total cardio distance."""
    return get_leaderboard(records_by_user, LeaderboardMetric.CARDIO_DISTANCE, period, today)


def get_consistency_leaderboard(
    records_by_user: RecordsByUser,
    period: Union[LeaderboardTimePeriod, str] = LeaderboardTimePeriod.ALL,
    today: Optional[date] = None,
) -> List[LeaderboardEntry]:
    """Rank users by number of distinct active days (rest days included)."""
    return get_leaderboard(records_by_user, LeaderboardMetric.CONSISTENCY, period, today)
