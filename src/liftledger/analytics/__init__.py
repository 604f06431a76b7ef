"""Analytics engines: aggregation, streaks, personal records and leaderboards."""

from .aggregation import (
    calculate_total_volume,
    calculate_total_reps,
    calculate_total_cardio_distance,
    calculate_total_cardio_duration,
    calculate_total_calisthenics_reps,
    find_favorite_exercise,
    get_volume_data_points,
    get_distance_data_points,
    filter_records_by_period,
    get_analytics_summary,
    get_strength_analytics,
    get_cardio_analytics,
    get_last_exercise_data,
)
from .streaks import calculate_current_streak, calculate_longest_streak
from .personal_records import (
    MetricBest,
    StrengthRecord,
    CardioRecord,
    CalisthenicsRecord,
    PersonalRecordBook,
    scan_personal_records,
    find_all_prs,
    detect_new_prs,
    summarize_prs,
)
from .leaderboards import (
    rank_entries,
    filter_records_by_leaderboard_period,
    get_leaderboard,
    get_volume_leaderboard,
    get_cardio_distance_leaderboard,
    get_consistency_leaderboard,
)

__all__ = [
    # Aggregation
    "calculate_total_volume",
    "calculate_total_reps",
    "calculate_total_cardio_distance",
    "calculate_total_cardio_duration",
    "calculate_total_calisthenics_reps",
    "find_favorite_exercise",
    "get_volume_data_points",
    "get_distance_data_points",
    "filter_records_by_period",
    "get_analytics_summary",
    "get_strength_analytics",
    "get_cardio_analytics",
    "get_last_exercise_data",
    # Streaks
    "calculate_current_streak",
    "calculate_longest_streak",
    # Personal records
    "MetricBest",
    "StrengthRecord",
    "CardioRecord",
    "CalisthenicsRecord",
    "PersonalRecordBook",
    "scan_personal_records",
    "find_all_prs",
    "detect_new_prs",
    "summarize_prs",
    # Leaderboards
    "rank_entries",
    "filter_records_by_leaderboard_period",
    "get_leaderboard",
    "get_volume_leaderboard",
    "get_cardio_distance_leaderboard",
    "get_consistency_leaderboard",
]
