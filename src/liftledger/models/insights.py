"""Request and response models for the progress insight service."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .records import to_camel


class ProgressPoint(BaseModel):
    """One historical value of an exercise metric."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str = Field(..., description="YYYY-MM-DD")
    value: float = Field(..., description="Metric value on that date")


class ProgressRequest(BaseModel):
    """Body posted to the insight service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exercise: str = Field(..., min_length=1, description="Exercise name, e.g. Bench Press")
    metric: str = Field(..., min_length=1, description="Metric name, e.g. weight")
    history: List[ProgressPoint] = Field(
        ...,
        min_length=1,
        description="Historical points, ascending by date",
    )


class ProgressInsight(BaseModel):
    """Insight returned by the service; fields are strictly typed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
    )

    is_new_pr: bool = Field(..., alias="isNewPR", description="Latest log is a personal record")
    delta: float = Field(..., description="Latest value minus first value")
    percent_change: float = Field(..., description="Percentage change from first to latest")
    first_date: str = Field(..., description="Date of first logged point")
    latest_date: str = Field(..., description="Date of latest logged point")
    insight_text: str = Field(..., description="Human-readable insight message")
