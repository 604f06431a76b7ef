"""
Normalization of stored exercise, workout and day documents.

Stored history has accumulated several shapes over time. Each known shape has
its own parser; anything unrecognised falls through to a well-formed empty
exercise of the resolved modality. Normalization never raises on messy
exercise data:
- Unknown or missing modality is read as strength
- Sets failing their type/positivity checks are dropped, not zeroed
- Cardio without usable data keeps a duration of 0
"""

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from .exceptions import RecordValidationError
from .models.records import (
    CalisthenicsSet,
    CardioEntry,
    Day,
    Exercise,
    Modality,
    StrengthSet,
    TrainingRecord,
    Workout,
    make_day_id,
)
from .utils.dates import parse_local_date, to_local_date_string

logger = logging.getLogger(__name__)

DEFAULT_EXERCISE_NAME = "Exercise"

T = TypeVar("T")


# =============================================================================
# Field checks
# =============================================================================

def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _positive_int(value: Any) -> Optional[int]:
    if not _is_number(value) or value <= 0 or int(value) != value:
        return None
    return int(value)


def _positive_number(value: Any) -> Optional[float]:
    if not _is_number(value) or value <= 0:
        return None
    return float(value)


def _field(raw: Mapping[str, Any], camel: str, snake: Optional[str] = None) -> Any:
    """Read a stored field by its camelCase key, accepting snake_case too."""
    if camel in raw:
        return raw[camel]
    if snake is not None:
        return raw.get(snake)
    return None


def _collect(items: Iterable[Any], parse: Callable[[Any], Optional[T]], label: str) -> List[T]:
    parsed: List[T] = []
    dropped = 0
    for item in items:
        entry = parse(item)
        if entry is None:
            dropped += 1
        else:
            parsed.append(entry)
    if dropped:
        logger.debug(f"Dropped {dropped} invalid {label} set(s)")
    return parsed


# =============================================================================
# Set parsers
# =============================================================================

def _strength_set(raw: Any) -> Optional[StrengthSet]:
    if not isinstance(raw, Mapping):
        return None
    reps = _positive_int(raw.get("reps"))
    weight = raw.get("weight")
    if reps is None or not _is_number(weight) or weight < 0:
        return None
    return StrengthSet(reps=reps, weight=float(weight))


def _calisthenics_set(raw: Any) -> Optional[CalisthenicsSet]:
    if not isinstance(raw, Mapping):
        return None
    reps = _positive_int(raw.get("reps"))
    if reps is None:
        return None
    return CalisthenicsSet(reps=reps, duration=_positive_number(raw.get("duration")))


def _legacy_calisthenics_set(raw: Any) -> Optional[CalisthenicsSet]:
    # Legacy sets were logged as strength; only reps carry over
    if not isinstance(raw, Mapping):
        return None
    reps = _positive_int(raw.get("reps"))
    if reps is None:
        return None
    return CalisthenicsSet(reps=reps)


def _cardio_entry(raw: Any) -> CardioEntry:
    if not isinstance(raw, Mapping):
        return CardioEntry(duration=0)
    duration = _positive_number(raw.get("duration"))
    if duration is None:
        logger.debug(f"Cardio entry without a usable duration: {raw.get('duration')!r}")
        duration = 0.0
    return CardioEntry(
        duration=duration,
        distance=_positive_number(raw.get("distance")),
        pace=_positive_number(raw.get("pace")),
    )


# =============================================================================
# Exercise shapes
# =============================================================================

def _parse_modality(value: Any) -> Modality:
    if isinstance(value, Modality):
        return value
    if isinstance(value, str):
        try:
            return Modality(value.strip().lower())
        except ValueError:
            logger.debug(f"Unknown modality {value!r}, reading as strength")
    return Modality.STRENGTH


def _strength_exercise(raw: Mapping[str, Any], exercise_id: Optional[str], name: str) -> Exercise:
    strength_sets = _field(raw, "strengthSets", "strength_sets")
    legacy_sets = raw.get("sets")

    if isinstance(strength_sets, list):
        # Current shape
        sets = _collect(strength_sets, _strength_set, "strength")
    elif _is_number(legacy_sets) and _is_number(raw.get("reps")) and _is_number(raw.get("weight")):
        # Legacy single set: {sets, reps, weight}
        sets = _collect([{"reps": raw["reps"], "weight": raw["weight"]}], _strength_set, "strength")
    elif isinstance(legacy_sets, list):
        # Legacy array of sets: {sets: [{reps, weight}]}
        sets = _collect(legacy_sets, _strength_set, "strength")
    else:
        sets = []

    return Exercise(
        exercise_id=exercise_id,
        name=name,
        modality=Modality.STRENGTH,
        strength_sets=sets,
    )


def _cardio_exercise(raw: Mapping[str, Any], exercise_id: Optional[str], name: str) -> Exercise:
    return Exercise(
        exercise_id=exercise_id,
        name=name,
        modality=Modality.CARDIO,
        cardio_data=_cardio_entry(_field(raw, "cardioData", "cardio_data")),
    )


def _calisthenics_exercise(raw: Mapping[str, Any], exercise_id: Optional[str], name: str) -> Exercise:
    calisthenics_sets = _field(raw, "calisthenicsSets", "calisthenics_sets")
    legacy_sets = raw.get("sets")

    if isinstance(calisthenics_sets, list):
        # Current shape
        sets = _collect(calisthenics_sets, _calisthenics_set, "calisthenics")
    elif isinstance(legacy_sets, list):
        # Legacy calisthenics logged as strength sets, weight dropped
        sets = _collect(legacy_sets, _legacy_calisthenics_set, "calisthenics")
    else:
        sets = []

    return Exercise(
        exercise_id=exercise_id,
        name=name,
        modality=Modality.CALISTHENICS,
        calisthenics_sets=sets,
    )


_EXERCISE_PARSERS: Dict[Modality, Callable[[Mapping[str, Any], Optional[str], str], Exercise]] = {
    Modality.STRENGTH: _strength_exercise,
    Modality.CARDIO: _cardio_exercise,
    Modality.CALISTHENICS: _calisthenics_exercise,
}


def normalize_exercise(raw: Any) -> Exercise:
    """Convert a stored exercise of any known shape into a canonical Exercise.

    Supported shapes:
    - Current: explicit `modality` plus `strengthSets`, `cardioData` or
      `calisthenicsSets`
    - Legacy single set: `{sets: 3, reps: 5, weight: 100}` -> one strength set
    - Legacy set list: `{sets: [{reps, weight}, ...]}` -> strength sets
    - Legacy calisthenics: `{modality: "calisthenics", sets: [{reps}, ...]}`

    Args:
        raw: A stored mapping, an Exercise, or anything else

    Returns:
        A well-formed Exercise; never raises for malformed input
    """
    if isinstance(raw, Exercise):
        raw = raw.model_dump(by_alias=True, mode="json")
    if not isinstance(raw, Mapping):
        logger.debug(f"Unreadable exercise {type(raw).__name__}, using empty strength exercise")
        return Exercise(name=DEFAULT_EXERCISE_NAME, modality=Modality.STRENGTH, strength_sets=[])

    name = raw.get("name")
    if not isinstance(name, str):
        name = DEFAULT_EXERCISE_NAME
    exercise_id = _field(raw, "exerciseId", "exercise_id")
    if not isinstance(exercise_id, str) or not exercise_id:
        exercise_id = None

    modality = _parse_modality(raw.get("modality"))
    return _EXERCISE_PARSERS[modality](raw, exercise_id, name)


def normalize_exercises(raw: Any) -> List[Exercise]:
    """Normalize a stored exercise list; anything but a list becomes []."""
    if not isinstance(raw, (list, tuple)):
        return []
    return [normalize_exercise(ex) for ex in raw]


# =============================================================================
# Records
# =============================================================================

def normalize_date(value: Any) -> str:
    """Normalize a date-like value to a local YYYY-MM-DD string.

    Raises:
        ValueError: If the value cannot be read as a date
    """
    return to_local_date_string(value)


def _record_date(raw: Mapping[str, Any], record_id: str) -> str:
    value = raw.get("date")
    try:
        return normalize_date(value)
    except ValueError:
        logger.warning(f"Record {record_id or '<unknown>'} has invalid date {value!r}")
        return value if isinstance(value, str) else ""


def _as_mapping(raw: Any, model: type) -> Mapping[str, Any]:
    if isinstance(raw, TrainingRecord):
        return raw.model_dump(by_alias=True, mode="json")
    if not isinstance(raw, Mapping):
        raise RecordValidationError(
            f"Cannot read {type(raw).__name__} as a {model.__name__}",
            details={"type": type(raw).__name__},
        )
    return raw


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def normalize_workout(raw: Any) -> Workout:
    """Normalize a stored workout document.

    Raises:
        RecordValidationError: If the document is not a mapping at all
    """
    data = _as_mapping(raw, Workout)
    workout_id = _string(data.get("id"))
    owner_id = _string(_field(data, "ownerId", "owner_id")) or _string(_field(data, "userId", "user_id"))
    return Workout(
        id=workout_id,
        owner_id=owner_id,
        date=_record_date(data, workout_id),
        exercises=normalize_exercises(data.get("exercises")),
    )


def normalize_day(raw: Any) -> Day:
    """Normalize a stored day document.

    Missing ids are derived as `{userId}_{YYYY-MM-DD}` when both parts are known.

    Raises:
        RecordValidationError: If the document is not a mapping at all
    """
    data = _as_mapping(raw, Day)
    day_id = _string(data.get("id"))
    user_id = _string(_field(data, "userId", "user_id")) or _string(_field(data, "ownerId", "owner_id"))
    day_date = _record_date(data, day_id)
    if not day_id and user_id and parse_local_date(day_date) is not None:
        day_id = make_day_id(user_id, day_date)

    is_rest_day = _field(data, "isRestDay", "is_rest_day")
    notes = data.get("notes")
    return Day(
        id=day_id,
        user_id=user_id,
        date=day_date,
        is_rest_day=is_rest_day if isinstance(is_rest_day, bool) else False,
        exercises=normalize_exercises(data.get("exercises")),
        notes=notes if isinstance(notes, str) else None,
    )


_RECORD_NORMALIZERS: Dict[str, Callable[[Any], TrainingRecord]] = {
    "day": normalize_day,
    "workout": normalize_workout,
}


def normalize_records(raws: Iterable[Any], kind: str = "day") -> List[TrainingRecord]:
    """Normalize a batch of stored documents, skipping unreadable ones.

    Args:
        raws: Stored documents
        kind: "day" or "workout"
    """
    try:
        normalizer = _RECORD_NORMALIZERS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind {kind!r}, expected one of {sorted(_RECORD_NORMALIZERS)}")

    records: List[TrainingRecord] = []
    for index, raw in enumerate(raws):
        try:
            records.append(normalizer(raw))
        except RecordValidationError as e:
            logger.warning(f"Skipping record #{index}: {e.message}")
    return records


# =============================================================================
# Workouts -> days
# =============================================================================

def workouts_to_days(workouts: Iterable[Workout]) -> List[Day]:
    """Group workouts into one Day per (owner, local date).

    Exercises from several workouts on the same date are concatenated in input
    order. Workouts without an owner or with an invalid date are skipped.

    Returns:
        Days sorted by user id, then date
    """
    grouped: Dict[Tuple[str, str], List[Exercise]] = {}
    for workout in workouts:
        if not workout.owner_id:
            logger.warning(f"Workout {workout.id or '<unknown>'} has no ownerId, skipping")
            continue
        if workout.local_date is None:
            logger.warning(f"Workout {workout.id or '<unknown>'} has invalid date {workout.date!r}, skipping")
            continue
        grouped.setdefault((workout.owner_id, workout.date), []).extend(workout.exercises)

    days = [
        Day(
            id=make_day_id(user_id, day_date),
            user_id=user_id,
            date=day_date,
            is_rest_day=False,
            exercises=list(exercises),
        )
        for (user_id, day_date), exercises in grouped.items()
    ]
    days.sort(key=lambda d: (d.user_id, d.date))
    logger.info(f"Grouped workouts into {len(days)} day(s)")
    return days
