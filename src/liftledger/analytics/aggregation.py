"""
Aggregation engine.

Pure functions over sequences of workouts or days: totals, favorite exercise,
trend buckets, period filtering and the per-modality analytics views.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from ..models.analytics import (
    AnalyticsSummary,
    CardioAnalytics,
    DistanceDataPoint,
    ExerciseFrequency,
    MuscleGroupStats,
    StrengthAnalytics,
    TimePeriod,
    VolumeDataPoint,
)
from ..models.records import CatalogExercise, Exercise, Modality, TrainingRecord
from ..utils.dates import bucket_for, format_local_date, parse_record_date, shift_months
from .streaks import calculate_current_streak, calculate_longest_streak

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=TrainingRecord)

Catalog = Mapping[str, CatalogExercise]

UNKNOWN_MUSCLE_GROUP = "unknown"


def _exercises(records: Sequence[TrainingRecord], modality: Optional[Modality] = None):
    for record in records:
        for exercise in record.exercises:
            if modality is None or exercise.modality == modality:
                yield exercise


# =============================================================================
# Totals
# =============================================================================

def calculate_total_volume(records: Sequence[TrainingRecord]) -> float:
    """Sum of reps x weight over strength sets. Other modalities add nothing."""
    return sum(ex.volume for ex in _exercises(records, Modality.STRENGTH))


def calculate_total_reps(records: Sequence[TrainingRecord]) -> int:
    """Strength reps plus calisthenics reps."""
    return sum(ex.rep_count for ex in _exercises(records))


def calculate_total_cardio_distance(records: Sequence[TrainingRecord]) -> float:
    return sum(ex.cardio_distance for ex in _exercises(records, Modality.CARDIO))


def calculate_total_cardio_duration(records: Sequence[TrainingRecord]) -> float:
    return sum(ex.cardio_duration for ex in _exercises(records, Modality.CARDIO))


def calculate_total_calisthenics_reps(records: Sequence[TrainingRecord]) -> int:
    return sum(ex.calisthenics_reps for ex in _exercises(records, Modality.CALISTHENICS))


# =============================================================================
# Favorite exercise
# =============================================================================

def find_favorite_exercise(
    records: Sequence[TrainingRecord],
    catalog: Optional[Catalog] = None,
) -> Optional[str]:
    """Name of the most frequently logged exercise.

    Exercises are grouped by `exerciseId or name`; on equal counts the key seen
    first wins. The name comes from the catalog when it knows the key, otherwise
    from the most recently dated occurrence with a valid date.

    Returns:
        Display name, or None when nothing was logged
    """
    counts: Dict[str, int] = {}
    latest_names: Dict[str, Tuple[date, str]] = {}

    for record in records:
        on = record.local_date
        for exercise in record.exercises:
            key = exercise.key
            counts[key] = counts.get(key, 0) + 1
            if on is None:
                continue
            seen = latest_names.get(key)
            if seen is None or on >= seen[0]:
                latest_names[key] = (on, exercise.name)

    if not counts:
        return None

    # max() keeps the first key among equal counts
    favorite = max(counts, key=lambda k: counts[k])

    if catalog and favorite in catalog:
        return catalog[favorite].name
    if favorite in latest_names and latest_names[favorite][1]:
        return latest_names[favorite][1]
    return favorite


# =============================================================================
# Trends
# =============================================================================

def _bucketed(
    records: Sequence[R],
    period: Union[TimePeriod, str],
    context: str,
) -> List[Tuple[str, date, List[R]]]:
    period_value = period.value if isinstance(period, TimePeriod) else period
    buckets: Dict[str, Tuple[date, List[R]]] = {}

    for record in records:
        parsed = parse_record_date(record.date, context)
        if parsed is None:
            continue
        key, start = bucket_for(parsed, period_value)
        buckets.setdefault(key, (start, []))[1].append(record)

    return sorted(
        ((key, start, members) for key, (start, members) in buckets.items()),
        key=lambda item: item[1],
    )


def get_volume_data_points(
    records: Sequence[TrainingRecord],
    period: Union[TimePeriod, str] = TimePeriod.MONTH,
) -> List[VolumeDataPoint]:
    """Strength volume per trend bucket, ascending by bucket start.

    Buckets: week -> Monday of the ISO week, month -> first of the month,
    year -> January 1st, anything else -> the exact date.
    """
    return [
        VolumeDataPoint(
            date=format_local_date(start),
            volume=calculate_total_volume(members),
            workout_count=len(members),
        )
        for _, start, members in _bucketed(records, period, "volume_trend")
    ]


def get_distance_data_points(
    records: Sequence[TrainingRecord],
    period: Union[TimePeriod, str] = TimePeriod.MONTH,
) -> List[DistanceDataPoint]:
    """Cardio distance and duration per trend bucket, ascending by bucket start."""
    return [
        DistanceDataPoint(
            date=format_local_date(start),
            distance=calculate_total_cardio_distance(members),
            duration=calculate_total_cardio_duration(members),
            workout_count=len(members),
        )
        for _, start, members in _bucketed(records, period, "distance_trend")
    ]


# =============================================================================
# Period filtering
# =============================================================================

def period_cutoff(period: Union[TimePeriod, str], today: date) -> Optional[date]:
    """Inclusive lower bound for an analytics period, None for `all`."""
    period = TimePeriod(period)
    if period == TimePeriod.WEEK:
        return today - timedelta(days=7)
    if period == TimePeriod.MONTH:
        return shift_months(today, -1)
    if period == TimePeriod.YEAR:
        return shift_months(today, -12)
    return None


def filter_records_by_period(
    records: Sequence[R],
    period: Union[TimePeriod, str],
    today: Optional[date] = None,
) -> List[R]:
    """Keep records dated on or after the period cutoff.

    Args:
        records: Workouts or days
        period: week, month, year or all
        today: Reference date, defaults to the local current date

    Raises:
        ValueError: If the period is not a known TimePeriod
    """
    cutoff = period_cutoff(period, today or date.today())
    if cutoff is None:
        return list(records)

    kept = []
    for record in records:
        parsed = parse_record_date(record.date, "filter_records_by_period")
        if parsed is not None and parsed >= cutoff:
            kept.append(record)
    return kept


# =============================================================================
# Summary views
# =============================================================================

def get_analytics_summary(
    records: Sequence[TrainingRecord],
    catalog: Optional[Catalog] = None,
    today: Optional[date] = None,
) -> AnalyticsSummary:
    """Compute the headline analytics for a set of records."""
    return AnalyticsSummary(
        total_workouts=sum(1 for r in records if r.exercises),
        current_streak=calculate_current_streak(records, today=today),
        longest_streak=calculate_longest_streak(records),
        favorite_exercise=find_favorite_exercise(records, catalog),
        total_volume=calculate_total_volume(records),
        total_cardio_distance=calculate_total_cardio_distance(records),
        total_cardio_duration=calculate_total_cardio_duration(records),
        total_calisthenics_reps=calculate_total_calisthenics_reps(records),
    )


def _by_frequency(stats: Dict[str, ExerciseFrequency]) -> List[ExerciseFrequency]:
    # sorted() is stable, so equal counts keep first-seen order
    return sorted(stats.values(), key=lambda s: s.count, reverse=True)


def get_strength_analytics(
    records: Sequence[TrainingRecord],
    catalog: Optional[Catalog] = None,
    period: Union[TimePeriod, str] = TimePeriod.MONTH,
) -> StrengthAnalytics:
    """Strength-only analytics: volume, frequency, muscle groups and trend.

    Muscle groups come from the catalog; exercises it does not know are
    counted under "unknown".
    """
    catalog = catalog or {}
    total_volume = calculate_total_volume(records)
    strength_records = [
        r for r in records
        if any(ex.modality == Modality.STRENGTH for ex in r.exercises)
    ]

    frequency: Dict[str, ExerciseFrequency] = {}
    groups: Dict[str, Dict] = {}

    for exercise in _exercises(records, Modality.STRENGTH):
        key = exercise.key
        heaviest = max((s.weight for s in exercise.strength_sets or []), default=0.0)
        stats = frequency.get(key)
        if stats is None:
            frequency[key] = ExerciseFrequency(
                exercise_id=key, name=exercise.name, count=1, max_weight=heaviest,
            )
        else:
            stats.name = exercise.name
            stats.count += 1
            stats.max_weight = max(stats.max_weight, heaviest)

        entry = catalog.get(exercise.exercise_id or "")
        muscle_group = (entry.muscle_group if entry else None) or UNKNOWN_MUSCLE_GROUP
        group = groups.setdefault(muscle_group, {"volume": 0.0, "frequency": 0, "exercises": set()})
        group["volume"] += exercise.volume
        group["frequency"] += 1
        group["exercises"].add(key)

    volume_by_muscle_group = sorted(
        (
            MuscleGroupStats(
                muscle_group=name,
                volume=data["volume"],
                frequency=data["frequency"],
                exercises=len(data["exercises"]),
            )
            for name, data in groups.items()
        ),
        key=lambda g: g.volume,
        reverse=True,
    )

    return StrengthAnalytics(
        total_volume=total_volume,
        average_volume_per_workout=total_volume / len(strength_records) if strength_records else 0.0,
        max_volume_workout=max((r.total_volume for r in records), default=0.0),
        exercises_by_frequency=_by_frequency(frequency),
        volume_by_muscle_group=volume_by_muscle_group,
        volume_trend=get_volume_data_points(records, period),
    )


def get_cardio_analytics(
    records: Sequence[TrainingRecord],
    period: Union[TimePeriod, str] = TimePeriod.MONTH,
) -> CardioAnalytics:
    """Cardio-only analytics: distance, duration, pace, trend and frequency."""
    entries = [ex.cardio_data for ex in _exercises(records, Modality.CARDIO) if ex.cardio_data]

    total_distance = sum(e.distance or 0.0 for e in entries)
    total_duration = sum(e.duration for e in entries)
    paces = [
        e.effective_pace for e in entries
        if e.distance and e.effective_pace is not None
    ]

    frequency: Dict[str, ExerciseFrequency] = {}
    for exercise in _exercises(records, Modality.CARDIO):
        key = exercise.key
        stats = frequency.get(key)
        if stats is None:
            frequency[key] = ExerciseFrequency(
                exercise_id=key,
                name=exercise.name,
                count=1,
                total_distance=exercise.cardio_distance,
            )
        else:
            stats.name = exercise.name
            stats.count += 1
            stats.total_distance += exercise.cardio_distance

    return CardioAnalytics(
        total_distance=total_distance,
        total_duration=total_duration,
        average_pace=total_duration / total_distance if total_distance > 0 else 0.0,
        longest_distance=max((e.distance or 0.0 for e in entries), default=0.0),
        longest_duration=max((e.duration for e in entries), default=0.0),
        best_pace=min(paces, default=0.0),
        distance_trend=get_distance_data_points(records, period),
        exercises_by_frequency=_by_frequency(frequency),
    )


def get_last_exercise_data(
    records: Sequence[TrainingRecord],
    exercise_key: str,
) -> Optional[Exercise]:
    """The exercise as last logged, from the most recent record containing it.

    Later entries win on equal dates, and within a record the first matching
    exercise is returned.
    """
    latest: Optional[Tuple[date, Exercise]] = None
    for record in records:
        on = record.local_date
        if on is None:
            continue
        exercise = next((ex for ex in record.exercises if ex.key == exercise_key), None)
        if exercise is not None and (latest is None or on >= latest[0]):
            latest = (on, exercise)
    return latest[1] if latest else None
