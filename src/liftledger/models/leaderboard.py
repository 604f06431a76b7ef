"""Leaderboard models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .records import to_camel


class LeaderboardTimePeriod(str, Enum):
    """Leaderboard windows, counted back from today inclusive."""
    SEVEN_DAYS = "7days"
    THIRTY_DAYS = "30days"
    ALL = "all"


LEADERBOARD_PERIOD_DAYS = {
    LeaderboardTimePeriod.SEVEN_DAYS: 7,
    LeaderboardTimePeriod.THIRTY_DAYS: 30,
}


class LeaderboardMetric(str, Enum):
    """What a leaderboard ranks users by."""
    VOLUME = "volume"
    CARDIO_DISTANCE = "distance"
    CONSISTENCY = "consistency"


class LeaderboardEntry(BaseModel):
    """One user's standing."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    user_id: str = Field(..., description="User identifier")
    value: float = Field(..., description="Volume, distance or active-day count")
    rank: int = Field(..., ge=1, description="1-based rank, ties share a rank")
