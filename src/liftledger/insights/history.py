"""
Exercise history extraction and insight gating.

The insight service needs one value per session, oldest first:
- strength: heaviest set weight
- cardio: distance, falling back to duration when no distance was logged
- calisthenics: most reps in a set
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from ..models.insights import ProgressPoint
from ..models.records import Day, Exercise, Modality, TrainingRecord
from ..utils.dates import parse_local_date, parse_record_date

logger = logging.getLogger(__name__)

MIN_SESSIONS = 8
MIN_DURATION_DAYS = 14

_METRIC_NAMES = {
    Modality.STRENGTH: "weight",
    Modality.CALISTHENICS: "reps",
}


def _matches(exercise: Exercise, exercise_key: str, modality: Modality) -> bool:
    if exercise.modality != modality:
        return False
    if exercise_key in (exercise.key, exercise.exercise_id, exercise.name):
        return True
    return exercise.name.strip().lower() == exercise_key.strip().lower()


def _session_value(exercise: Exercise) -> Optional[float]:
    if exercise.modality == Modality.STRENGTH and exercise.strength_sets:
        return max(s.weight for s in exercise.strength_sets)
    if exercise.modality == Modality.CARDIO and exercise.cardio_data is not None:
        data = exercise.cardio_data
        if data.distance and data.distance > 0:
            return data.distance
        if data.duration > 0:
            return data.duration
        return None
    if exercise.modality == Modality.CALISTHENICS and exercise.calisthenics_sets:
        return max(s.reps for s in exercise.calisthenics_sets)
    return None


def _sessions(records: Sequence[TrainingRecord]) -> List[Tuple[date, TrainingRecord]]:
    sessions = []
    for record in records:
        if isinstance(record, Day) and record.is_rest_day:
            continue
        if not record.exercises:
            continue
        parsed = parse_record_date(record.date, "extract_exercise_history")
        if parsed is not None:
            sessions.append((parsed, record))
    sessions.sort(key=lambda item: item[0])
    return sessions


def _find_exercise(
    record: TrainingRecord,
    exercise_key: str,
    modality: Modality,
) -> Optional[Exercise]:
    return next(
        (ex for ex in record.exercises if _matches(ex, exercise_key, modality)),
        None,
    )


def extract_exercise_history(
    records: Sequence[TrainingRecord],
    exercise_key: str,
    modality: Union[Modality, str],
) -> List[ProgressPoint]:
    """Build the progress history of one exercise.

    Rest days and empty records are skipped. In each record the first exercise
    of the same modality that matches by id, by name or by case-insensitive
    trimmed name is used. Sessions without a positive value are skipped.

    Args:
        records: Workouts or days, in any order
        exercise_key: Exercise id or display name
        modality: Modality the exercise must have been logged with

    Returns:
        Progress points ascending by date
    """
    modality = Modality(modality)
    history: List[ProgressPoint] = []

    for _, record in _sessions(records):
        exercise = _find_exercise(record, exercise_key, modality)
        if exercise is None:
            continue
        value = _session_value(exercise)
        if value is None or value <= 0:
            continue
        history.append(ProgressPoint(date=record.date, value=value))

    return history


def exercise_has_distance(
    records: Sequence[TrainingRecord],
    exercise_key: str,
) -> bool:
    """Whether any logged cardio session of the exercise recorded a distance."""
    for _, record in _sessions(records):
        exercise = _find_exercise(record, exercise_key, Modality.CARDIO)
        if exercise is not None and exercise.cardio_distance > 0:
            return True
    return False


def should_fetch_insight(
    history: Sequence[ProgressPoint],
    min_sessions: int = MIN_SESSIONS,
    min_duration_days: int = MIN_DURATION_DAYS,
) -> bool:
    """Whether a history is long enough to ask for an insight.

    Requires at least `min_sessions` points spanning at least
    `min_duration_days` calendar days from first to latest.
    """
    if not history or len(history) < min_sessions:
        return False

    first = parse_local_date(history[0].date)
    latest = parse_local_date(history[-1].date)
    if first is None or latest is None:
        logger.warning(f"Cannot gate insight on invalid history dates: {history[0].date!r}, {history[-1].date!r}")
        return False

    return (latest - first).days >= min_duration_days


def is_new_pr(history: Sequence[ProgressPoint]) -> bool:
    """Whether the latest point is strictly greater than every earlier one."""
    if len(history) < 2:
        return False
    latest = history[-1].value
    return all(latest > point.value for point in history[:-1])


def get_metric_name(modality: Union[Modality, str], has_distance: bool = False) -> str:
    """Metric name sent to the insight service for a modality."""
    modality = Modality(modality)
    if modality == Modality.CARDIO:
        return "distance" if has_distance else "duration"
    return _METRIC_NAMES[modality]
