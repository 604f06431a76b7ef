"""Analytics result models: summaries, personal records and trend points."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .records import Modality, to_camel


class TimePeriod(str, Enum):
    """Analytics time windows and trend bucket sizes."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class PRType(str, Enum):
    """Types of personal records that can be tracked."""
    MAX_WEIGHT = "maxWeight"      # Heaviest single set
    MAX_VOLUME = "maxVolume"      # Largest reps x weight in a single set
    MAX_DISTANCE = "maxDistance"  # Longest cardio distance
    MAX_DURATION = "maxDuration"  # Longest cardio duration
    BEST_PACE = "bestPace"        # Lowest cardio pace
    MAX_REPS = "maxReps"          # Most reps in one calisthenics set


# Lower is better for these types, higher for everything else
LOWER_IS_BETTER = frozenset({PRType.BEST_PACE})


class AnalyticsSummary(BaseModel):
    """Aggregate statistics over a set of records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_workouts: int = Field(default=0, description="Records with at least one exercise")
    current_streak: int = Field(default=0, description="Consecutive days ending today")
    longest_streak: int = Field(default=0, description="Longest run of consecutive days")
    favorite_exercise: Optional[str] = Field(None, description="Most frequently logged exercise")
    total_volume: float = Field(default=0.0, description="Strength reps x weight")
    total_cardio_distance: float = Field(default=0.0)
    total_cardio_duration: float = Field(default=0.0, description="Seconds")
    total_calisthenics_reps: int = Field(default=0)


class ExercisePR(BaseModel):
    """A personal record for one exercise and metric."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    exercise_id: str = Field(..., description="Exercise id, or name when no id was logged")
    exercise_name: str = Field(..., description="Display name")
    modality: Modality
    pr_type: PRType
    value: float = Field(..., description="Weight, volume, distance, seconds, pace or reps")
    date: str = Field(..., description="Date the PR was set, YYYY-MM-DD")
    workout_id: str = Field(..., description="Record the PR was set in")


class PRSummary(BaseModel):
    """Summary of a user's personal records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_prs: int = Field(default=0, description="Total number of PRs")
    recent_prs: int = Field(default=0, description="PRs set inside the recent window")
    prs_by_type: Dict[str, int] = Field(
        default_factory=dict,
        description="Count of PRs by type"
    )
    latest_pr: Optional[ExercisePR] = Field(
        None,
        description="Most recently achieved PR"
    )


class VolumeDataPoint(BaseModel):
    """Strength volume for one trend bucket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str = Field(..., description="Bucket start date, YYYY-MM-DD")
    volume: float = 0.0
    workout_count: int = Field(default=0, description="Records in the bucket")


class DistanceDataPoint(BaseModel):
    """Cardio distance and duration for one trend bucket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str = Field(..., description="Bucket start date, YYYY-MM-DD")
    distance: float = 0.0
    duration: float = 0.0
    workout_count: int = Field(default=0, description="Records in the bucket")


class MuscleGroupStats(BaseModel):
    """Strength volume rolled up by muscle group."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    muscle_group: str
    volume: float = 0.0
    frequency: int = Field(default=0, description="Exercise occurrences")
    exercises: int = Field(default=0, description="Unique exercises")


class ExerciseFrequency(BaseModel):
    """How often an exercise was logged, with its headline number."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exercise_id: str
    name: str
    count: int = 0
    max_weight: float = 0.0
    total_distance: float = 0.0


class StrengthAnalytics(BaseModel):
    """Strength-specific analytics."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_volume: float = 0.0
    average_volume_per_workout: float = 0.0
    max_volume_workout: float = 0.0
    exercises_by_frequency: List[ExerciseFrequency] = Field(default_factory=list)
    volume_by_muscle_group: List[MuscleGroupStats] = Field(default_factory=list)
    volume_trend: List[VolumeDataPoint] = Field(default_factory=list)


class CardioAnalytics(BaseModel):
    """Cardio-specific analytics."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_distance: float = 0.0
    total_duration: float = 0.0
    average_pace: float = 0.0
    longest_distance: float = 0.0
    longest_duration: float = 0.0
    best_pace: float = 0.0
    distance_trend: List[DistanceDataPoint] = Field(default_factory=list)
    exercises_by_frequency: List[ExerciseFrequency] = Field(default_factory=list)
