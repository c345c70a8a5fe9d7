from typing import Optional

import config
from models.prediction_summary import PredictionSummary
from models.weight_prediction import PredictionResult, Trend

TREND_LABELS = {
    Trend.LOSING: "Trending Down",
    Trend.GAINING: "Trending Up",
    Trend.STABLE: "Stable",
}


def format_weight(weight_kg: float) -> str:
    return f"{weight_kg:.1f} kg"


def summarize_prediction(
    result: PredictionResult, current_weight_kg: float, goal_weight_kg: float
) -> PredictionSummary:
    """Builds the progress screen's view of a prediction."""
    projected_date_label: Optional[str] = None
    if result.projected_date is not None:
        projected_date_label = result.projected_date.strftime(
            config.PROJECTED_DATE_FORMAT
        )
    return PredictionSummary(
        current_weight_kg=current_weight_kg,
        goal_weight_kg=goal_weight_kg,
        predicted_weight_30_days=result.predicted_weight_30_days,
        weekly_change_kg=result.weekly_change_kg,
        days_to_goal=result.days_to_goal,
        projected_date_label=projected_date_label,
        trend=result.trend,
        trend_label=TREND_LABELS.get(result.trend),
        has_enough_data=result.trend != Trend.INSUFFICIENT_DATA,
    )
