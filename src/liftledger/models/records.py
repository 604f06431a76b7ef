"""Record models: logged exercises and the dated containers that hold them."""

import math
import datetime as dt
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.dates import parse_local_date, to_local_date_string


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class Modality(str, Enum):
    """Exercise category, determines which performance fields apply."""
    STRENGTH = "strength"
    CARDIO = "cardio"
    CALISTHENICS = "calisthenics"


class StrengthSet(BaseModel):
    """A single weighted set."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reps: int = Field(..., gt=0, description="Repetitions performed")
    weight: float = Field(..., ge=0, allow_inf_nan=False, description="Load lifted")

    @property
    def volume(self) -> float:
        return self.reps * self.weight


class CardioEntry(BaseModel):
    """Performance data for a cardio session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    duration: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Duration in seconds (0 only for degenerate legacy entries)",
    )
    distance: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Distance covered")
    pace: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Duration per unit distance")

    @property
    def effective_pace(self) -> Optional[float]:
        """Stored pace, or duration/distance when pace was not recorded."""
        if self.pace is not None and self.pace > 0 and math.isfinite(self.pace):
            return self.pace
        if self.distance and self.duration > 0:
            return self.duration / self.distance
        return None


class CalisthenicsSet(BaseModel):
    """A bodyweight set, optionally a timed hold."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reps: int = Field(..., gt=0, description="Repetitions performed")
    duration: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Hold duration in seconds")


class Exercise(BaseModel):
    """One exercise as logged inside a workout or day.

    Exactly one of `strength_sets`, `cardio_data` and `calisthenics_sets` is
    populated, the one matching `modality`.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exercise_id: Optional[str] = Field(None, description="Canonical exercise id")
    name: str = Field(..., description="Display name frozen at log time")
    modality: Modality = Field(default=Modality.STRENGTH)
    strength_sets: Optional[List[StrengthSet]] = None
    cardio_data: Optional[CardioEntry] = None
    calisthenics_sets: Optional[List[CalisthenicsSet]] = None

    @model_validator(mode="after")
    def check_modality_payload(self) -> "Exercise":
        payloads = {
            Modality.STRENGTH: self.strength_sets,
            Modality.CARDIO: self.cardio_data,
            Modality.CALISTHENICS: self.calisthenics_sets,
        }
        if payloads[self.modality] is None:
            raise ValueError(f"{self.modality.value} exercise is missing its performance data")
        stray = [m.value for m, data in payloads.items() if m != self.modality and data is not None]
        if stray:
            raise ValueError(
                f"{self.modality.value} exercise must not carry {', '.join(stray)} data"
            )
        return self

    @property
    def key(self) -> str:
        """Grouping key: canonical id, falling back to the display name."""
        return self.exercise_id or self.name

    @property
    def volume(self) -> float:
        """Sum of reps x weight; zero for anything but strength."""
        if self.modality != Modality.STRENGTH or not self.strength_sets:
            return 0.0
        return sum(s.volume for s in self.strength_sets)

    @property
    def rep_count(self) -> int:
        """Reps across strength and calisthenics sets; zero for cardio."""
        if self.modality == Modality.STRENGTH and self.strength_sets:
            return sum(s.reps for s in self.strength_sets)
        if self.modality == Modality.CALISTHENICS and self.calisthenics_sets:
            return sum(s.reps for s in self.calisthenics_sets)
        return 0

    @property
    def calisthenics_reps(self) -> int:
        if self.modality != Modality.CALISTHENICS or not self.calisthenics_sets:
            return 0
        return sum(s.reps for s in self.calisthenics_sets)

    @property
    def cardio_duration(self) -> float:
        if self.modality != Modality.CARDIO or self.cardio_data is None:
            return 0.0
        return self.cardio_data.duration

    @property
    def cardio_distance(self) -> float:
        if self.modality != Modality.CARDIO or self.cardio_data is None:
            return 0.0
        return self.cardio_data.distance or 0.0


class WorkoutSummary(BaseModel):
    """Denormalized totals recomputed from a record's exercises."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_volume: float = 0.0
    total_reps: int = 0
    total_cardio_duration: float = 0.0
    exercise_ids: List[str] = Field(default_factory=list)


def summarize_exercises(exercises: List[Exercise]) -> WorkoutSummary:
    """Compute the derived totals for a list of exercises."""
    exercise_ids: List[str] = []
    for exercise in exercises:
        if exercise.exercise_id and exercise.exercise_id not in exercise_ids:
            exercise_ids.append(exercise.exercise_id)
    return WorkoutSummary(
        total_volume=sum(ex.volume for ex in exercises),
        total_reps=sum(ex.rep_count for ex in exercises),
        total_cardio_duration=sum(ex.cardio_duration for ex in exercises),
        exercise_ids=exercise_ids,
    )


class TrainingRecord(BaseModel):
    """Base for dated exercise containers (workouts and days)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default="", description="Record identifier")
    date: str = Field(..., description="Local calendar date, YYYY-MM-DD")
    exercises: List[Exercise] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        """Convert date/datetime values to YYYY-MM-DD; strings are kept as stored."""
        if isinstance(v, (dt.date, dt.datetime)):
            return to_local_date_string(v)
        return v

    @property
    def local_date(self) -> Optional[dt.date]:
        """Parsed calendar date, or None when the stored value is malformed."""
        return parse_local_date(self.date)

    @property
    def owner(self) -> str:
        return ""

    @property
    def is_active(self) -> bool:
        """Whether the record counts toward streaks and consistency."""
        return True

    def summarize(self) -> WorkoutSummary:
        return summarize_exercises(self.exercises)

    @property
    def total_volume(self) -> float:
        return sum(ex.volume for ex in self.exercises)

    @property
    def total_reps(self) -> int:
        return sum(ex.rep_count for ex in self.exercises)

    @property
    def total_cardio_duration(self) -> float:
        return sum(ex.cardio_duration for ex in self.exercises)

    @property
    def exercise_ids(self) -> List[str]:
        return self.summarize().exercise_ids


class Workout(TrainingRecord):
    """A logged workout session owned by one user."""

    owner_id: str = Field(default="", description="Owning user id")

    @property
    def owner(self) -> str:
        return self.owner_id


class Day(TrainingRecord):
    """All exercises a user logged on one calendar day.

    A rest day carries no exercises but still counts toward consistency.
    """

    user_id: str = Field(default="", description="Owning user id")
    is_rest_day: bool = False
    notes: Optional[str] = None

    @property
    def owner(self) -> str:
        return self.user_id

    @property
    def is_active(self) -> bool:
        return len(self.exercises) > 0 or self.is_rest_day


def make_day_id(user_id: str, day: str) -> str:
    """Day ids are `{userId}_{YYYY-MM-DD}`."""
    return f"{user_id}_{day}"


class CatalogExercise(BaseModel):
    """Exercise catalog entry used to resolve names and muscle groups."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    muscle_group: Optional[str] = None
    modality: Optional[Modality] = None
