from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.weight_prediction import Trend


class PredictionSummary(BaseModel):
    """
    Display-ready view of a prediction for the progress screen. Dates are
    pre-formatted so clients don't need to know the prediction's time zone.
    """

    current_weight_kg: float
    goal_weight_kg: float
    predicted_weight_30_days: float = Field(..., alias="predictedWeight30Days")
    weekly_change_kg: float
    days_to_goal: Optional[int] = None
    projected_date_label: Optional[str] = None
    trend: Trend
    trend_label: Optional[str] = None
    has_enough_data: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
