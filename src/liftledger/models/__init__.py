"""Data models."""

from .records import (
    to_camel,
    Modality,
    StrengthSet,
    CardioEntry,
    CalisthenicsSet,
    Exercise,
    WorkoutSummary,
    summarize_exercises,
    TrainingRecord,
    Workout,
    Day,
    make_day_id,
    CatalogExercise,
)
from .analytics import (
    TimePeriod,
    PRType,
    LOWER_IS_BETTER,
    AnalyticsSummary,
    ExercisePR,
    PRSummary,
    VolumeDataPoint,
    DistanceDataPoint,
    MuscleGroupStats,
    ExerciseFrequency,
    StrengthAnalytics,
    CardioAnalytics,
)
from .leaderboard import (
    LeaderboardTimePeriod,
    LeaderboardMetric,
    LEADERBOARD_PERIOD_DAYS,
    LeaderboardEntry,
)
from .insights import ProgressPoint, ProgressRequest, ProgressInsight

__all__ = [
    # Records
    "to_camel",
    "Modality",
    "StrengthSet",
    "CardioEntry",
    "CalisthenicsSet",
    "Exercise",
    "WorkoutSummary",
    "summarize_exercises",
    "TrainingRecord",
    "Workout",
    "Day",
    "make_day_id",
    "CatalogExercise",
    # Analytics
    "TimePeriod",
    "PRType",
    "LOWER_IS_BETTER",
    "AnalyticsSummary",
    "ExercisePR",
    "PRSummary",
    "VolumeDataPoint",
    "DistanceDataPoint",
    "MuscleGroupStats",
    "ExerciseFrequency",
    "StrengthAnalytics",
    "CardioAnalytics",
    # Leaderboards
    "LeaderboardTimePeriod",
    "LeaderboardMetric",
    "LEADERBOARD_PERIOD_DAYS",
    "LeaderboardEntry",
    # Insights
    "ProgressPoint",
    "ProgressRequest",
    "ProgressInsight",
]
