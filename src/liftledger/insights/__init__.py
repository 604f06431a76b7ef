"""Progress insights: history extraction, caching and the remote client."""

from .history import (
    MIN_SESSIONS,
    MIN_DURATION_DAYS,
    extract_exercise_history,
    exercise_has_distance,
    should_fetch_insight,
    is_new_pr,
    get_metric_name,
)
from .cache import InsightCache
from .client import InsightClient
from .service import InsightService

__all__ = [
    "MIN_SESSIONS",
    "MIN_DURATION_DAYS",
    "extract_exercise_history",
    "exercise_has_distance",
    "should_fetch_insight",
    "is_new_pr",
    "get_metric_name",
    "InsightCache",
    "InsightClient",
    "InsightService",
]
