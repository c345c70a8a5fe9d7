from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Trend(str, Enum):
    LOSING = "losing"
    GAINING = "gaining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


class PredictionResult(BaseModel):
    """
    Output of the trend predictor. Built fresh on every call; the goal fields
    are None (never zero) when no projection toward the goal is possible.
    projected_date is always UTC-aware, even when the caller's "now" was naive.
    """

    predicted_weight_30_days: float = Field(..., alias="predictedWeight30Days")
    weekly_change_kg: float = Field(..., alias="weeklyChangeKg")
    days_to_goal: Optional[int] = Field(default=None, alias="daysToGoal")
    projected_date: Optional[datetime] = Field(default=None, alias="projectedDate")
    trend: Trend

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @classmethod
    def insufficient_data(cls) -> "PredictionResult":
        return cls(
            predicted_weight_30_days=0.0,
            weekly_change_kg=0.0,
            trend=Trend.INSUFFICIENT_DATA,
        )

    @property
    def has_goal_projection(self) -> bool:
        return self.days_to_goal is not None and self.projected_date is not None
