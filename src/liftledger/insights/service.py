"""Progress insight orchestration: extract, gate, cache, fetch."""

import logging
from typing import Optional, Sequence, Union

from ..config import Settings, get_settings
from ..models.insights import ProgressInsight, ProgressRequest
from ..models.records import Modality, TrainingRecord
from .cache import InsightCache
from .client import InsightClient
from .history import (
    MIN_DURATION_DAYS,
    MIN_SESSIONS,
    exercise_has_distance,
    extract_exercise_history,
    get_metric_name,
    should_fetch_insight,
)

logger = logging.getLogger(__name__)


class InsightService:
    """
    Serves progress insights for a user's exercise history.

    Histories that are too short are never sent. Cached insights are served
    until they expire. Client failures propagate unchanged and are not cached.
    """

    def __init__(
        self,
        client: InsightClient,
        cache: InsightCache,
        min_sessions: int = MIN_SESSIONS,
        min_duration_days: int = MIN_DURATION_DAYS,
    ):
        self.client = client
        self.cache = cache
        self.min_sessions = min_sessions
        self.min_duration_days = min_duration_days

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsightService":
        settings = settings or get_settings()
        return cls(
            client=InsightClient.from_settings(settings),
            cache=InsightCache.from_settings(settings),
            min_sessions=settings.insights_min_sessions,
            min_duration_days=settings.insights_min_duration_days,
        )

    async def close(self) -> None:
        await self.client.close()

    async def get_progress_insight(
        self,
        records: Sequence[TrainingRecord],
        exercise_key: str,
        modality: Union[Modality, str],
        exercise_name: Optional[str] = None,
    ) -> Optional[ProgressInsight]:
        """
        Get the progress insight for one exercise.

        Args:
            records: The user's workouts or days
            exercise_key: Exercise id or display name
            modality: Modality the exercise is logged with
            exercise_name: Name sent to the service, defaults to exercise_key

        Returns:
            The insight, or None when the history does not qualify yet

        Raises:
            InsightServiceError: If the remote call fails
        """
        modality = Modality(modality)
        history = extract_exercise_history(records, exercise_key, modality)
        if not should_fetch_insight(history, self.min_sessions, self.min_duration_days):
            logger.debug(f"History for {exercise_key} too short for insight ({len(history)} points)")
            return None

        has_distance = modality == Modality.CARDIO and exercise_has_distance(records, exercise_key)
        metric = get_metric_name(modality, has_distance)

        cached = self.cache.get(exercise_key, metric)
        if cached is not None:
            logger.debug(f"Insight cache hit for {exercise_key}/{metric}")
            return cached

        insight = await self.client.fetch_progress_insight(
            ProgressRequest(
                exercise=exercise_name or exercise_key,
                metric=metric,
                history=history,
            )
        )
        self.cache.set(exercise_key, metric, insight)
        logger.info(f"Fetched insight for {exercise_key}/{metric}")
        return insight
