"""Pytest configuration and fixtures."""

from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

import pytest

from liftledger.models import (
    CalisthenicsSet,
    CardioEntry,
    Day,
    Exercise,
    Modality,
    StrengthSet,
    Workout,
)

# Sunday; its ISO week starts on 2026-03-09
TODAY = date(2026, 3, 15)


def iso(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def days_ago(n: int, today: date = TODAY) -> str:
    return iso(today - timedelta(days=n))


def strength(
    exercise_id: str,
    sets: Sequence[Tuple[int, float]],
    name: Optional[str] = None,
) -> Exercise:
    """Strength exercise from (reps, weight) pairs."""
    return Exercise(
        exercise_id=exercise_id,
        name=name or exercise_id,
        modality=Modality.STRENGTH,
        strength_sets=[StrengthSet(reps=r, weight=w) for r, w in sets],
    )


def cardio(
    exercise_id: str,
    duration: float,
    distance: Optional[float] = None,
    pace: Optional[float] = None,
    name: Optional[str] = None,
) -> Exercise:
    return Exercise(
        exercise_id=exercise_id,
        name=name or exercise_id,
        modality=Modality.CARDIO,
        cardio_data=CardioEntry(duration=duration, distance=distance, pace=pace),
    )


def calisthenics(
    exercise_id: str,
    reps: Sequence[int],
    name: Optional[str] = None,
    duration: Optional[float] = None,
) -> Exercise:
    return Exercise(
        exercise_id=exercise_id,
        name=name or exercise_id,
        modality=Modality.CALISTHENICS,
        calisthenics_sets=[CalisthenicsSet(reps=r, duration=duration) for r in reps],
    )


def day(
    on: str,
    exercises: Optional[List[Exercise]] = None,
    user_id: str = "user-1",
    is_rest_day: bool = False,
    record_id: Optional[str] = None,
) -> Day:
    return Day(
        id=record_id or f"{user_id}_{on}",
        user_id=user_id,
        date=on,
        is_rest_day=is_rest_day,
        exercises=exercises or [],
    )


def workout(
    on: str,
    exercises: Optional[List[Exercise]] = None,
    owner_id: str = "user-1",
    record_id: str = "w1",
) -> Workout:
    return Workout(id=record_id, owner_id=owner_id, date=on, exercises=exercises or [])


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def mixed_days() -> List[Day]:
    """Two training days covering every modality."""
    return [
        day("2026-03-13", [
            strength("bench", [(5, 100), (3, 120)], name="Bench Press"),
            cardio("run", duration=1800, distance=5),
        ]),
        day("2026-03-14", [
            calisthenics("pullup", [10, 8], name="Pull Up"),
            strength("bench", [(5, 100)], name="Bench Press"),
        ]),
    ]
