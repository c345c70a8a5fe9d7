import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

import config
from models.weight_log import WeightSample
from models.weight_prediction import PredictionResult, Trend

ONE_DAY = timedelta(days=1)


class TrendLine(NamedTuple):
    """weight_kg = slope * days_since_first_sample + intercept"""

    slope: float
    intercept: float

    def value_at(self, day: float) -> float:
        return self.slope * day + self.intercept


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def whole_days_between(start: datetime, end: datetime) -> int:
    """Elapsed whole days from start to end, rounded down."""
    return (end - start) // ONE_DAY


def select_window(
    history: Sequence[WeightSample], now: datetime
) -> Optional[List[WeightSample]]:
    """
    Returns the samples the trend is fitted to: the last LOOKBACK_WINDOW_DAYS
    of measurements, or the whole history when that window is too sparse.
    None means there is not enough data for any fit.
    """
    if len(history) < config.MIN_SAMPLES_FOR_TREND:
        return None
    ordered = sorted(history, key=lambda sample: sample.timestamp)
    cutoff = now - timedelta(days=config.LOOKBACK_WINDOW_DAYS)
    recent = [sample for sample in ordered if sample.timestamp >= cutoff]
    if len(recent) >= config.MIN_SAMPLES_FOR_TREND:
        return recent
    logging.debug(
        f"Only {len(recent)} sample(s) in the last {config.LOOKBACK_WINDOW_DAYS} days. "
        f"Falling back to all {len(ordered)}."
    )
    return ordered


def fit_line(days: np.ndarray, weights: np.ndarray) -> Optional[TrendLine]:
    """Ordinary least squares fit. None when every sample shares the same day."""
    n = float(len(days))
    sum_x = days.sum()
    sum_y = weights.sum()
    sum_xy = (days * weights).sum()
    sum_x2 = (days * days).sum()
    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return TrendLine(float(slope), float(intercept))


def damp_short_span(line: TrendLine, span_days: float) -> TrendLine:
    """Pulls the slope toward zero when the data covers only a few days."""
    if span_days >= config.SHORT_SPAN_DAMPING_DAYS:
        return line
    damping_factor = float(
        np.clip(
            span_days / config.SHORT_SPAN_DAMPING_DAYS,
            config.MIN_DAMPING_FACTOR,
            1.0,
        )
    )
    return line._replace(slope=line.slope * damping_factor)


def cap_weekly_change(line: TrendLine) -> TrendLine:
    weekly_change = line.slope * 7
    capped = float(
        np.clip(weekly_change, -config.MAX_WEEKLY_CHANGE_KG, config.MAX_WEEKLY_CHANGE_KG)
    )
    if capped == weekly_change:
        return line
    return line._replace(slope=capped / 7)


def anchor_to_latest(
    line: TrendLine, days_until_now: int, latest_weight_kg: float
) -> TrendLine:
    """
    Re-anchors the line through the latest measurement when the fitted
    estimate for today has drifted too far from it.
    """
    estimated_today = line.value_at(days_until_now)
    if abs(estimated_today - latest_weight_kg) <= config.ANCHOR_DEVIATION_KG:
        return line
    logging.debug(
        f"Regression estimate {estimated_today:.2f} kg is more than "
        f"{config.ANCHOR_DEVIATION_KG} kg from the latest weight {latest_weight_kg:.2f} kg. "
        "Anchoring to the latest measurement."
    )
    return line._replace(intercept=latest_weight_kg - line.slope * days_until_now)


def weekly_change_of(line: TrendLine) -> float:
    return float(
        np.clip(
            line.slope * 7, -config.MAX_WEEKLY_CHANGE_KG, config.MAX_WEEKLY_CHANGE_KG
        )
    )


def classify_trend(weekly_change_kg: float) -> Trend:
    if weekly_change_kg < -config.STABLE_BAND_KG_PER_WEEK:
        return Trend.LOSING
    if weekly_change_kg > config.STABLE_BAND_KG_PER_WEEK:
        return Trend.GAINING
    return Trend.STABLE


def _round_half_away_from_zero(value: float) -> int:
    return int(np.sign(value) * np.floor(abs(value) + 0.5))


def project_goal(
    line: TrendLine,
    goal_weight_kg: float,
    days_until_now: int,
    trend: Trend,
    now: datetime,
) -> Tuple[Optional[int], Optional[datetime]]:
    """
    Solves the line for the goal weight. Returns (days_to_goal, projected_date),
    or (None, None) when the trend is not heading toward the goal or the answer
    falls outside the projection horizon.
    """
    current = line.value_at(days_until_now)
    heading_to_goal = (goal_weight_kg < current and trend == Trend.LOSING) or (
        goal_weight_kg > current and trend == Trend.GAINING
    )
    if not heading_to_goal or line.slope == 0:
        return None, None

    days_target_from_start = (goal_weight_kg - line.intercept) / line.slope
    days_from_today = days_target_from_start - days_until_now
    if not 0 < days_from_today < config.MAX_DAYS_TO_GOAL:
        return None, None

    days_to_goal = _round_half_away_from_zero(days_from_today)
    if not 0 < days_to_goal < config.MAX_DAYS_TO_GOAL:
        return None, None
    return days_to_goal, now + timedelta(days=days_to_goal)


def predict_weight(
    history: Sequence[WeightSample], goal_weight_kg: float, now: datetime
) -> PredictionResult:
    """
    Fits a linear trend to the weight history and projects it forward.

    The slope goes through a fixed sequence of heuristics before use: damping
    for short spans, capping to a plausible weekly rate, then anchoring to the
    latest measurement. Degenerate inputs give a conservative result instead
    of an error.
    """
    now = _as_utc(now)
    window = select_window(history, now)
    if window is None:
        return PredictionResult.insufficient_data()

    start = window[0].timestamp
    latest_weight = window[-1].weight_kg
    days = np.array(
        [whole_days_between(start, sample.timestamp) for sample in window],
        dtype=float,
    )
    weights = np.array([sample.weight_kg for sample in window], dtype=float)

    line = fit_line(days, weights)
    if line is None:
        logging.debug("All samples fall on the same day. Reporting a stable trend.")
        return PredictionResult(
            predicted_weight_30_days=max(latest_weight, config.MIN_PREDICTED_WEIGHT_KG),
            weekly_change_kg=0.0,
            trend=Trend.STABLE,
        )

    days_until_now = whole_days_between(start, now)
    line = damp_short_span(line, float(days[-1] - days[0]))
    line = cap_weekly_change(line)
    line = anchor_to_latest(line, days_until_now, latest_weight)

    weekly_change = weekly_change_of(line)
    trend = classify_trend(weekly_change)
    predicted_30 = line.value_at(days_until_now + config.PROJECTION_HORIZON_DAYS)
    days_to_goal, projected_date = project_goal(
        line, goal_weight_kg, days_until_now, trend, now
    )

    return PredictionResult(
        predicted_weight_30_days=max(predicted_30, config.MIN_PREDICTED_WEIGHT_KG),
        weekly_change_kg=weekly_change,
        days_to_goal=days_to_goal,
        projected_date=projected_date,
        trend=trend,
    )


class TrendPredictor:
    """
    Predicts weight trends from a user's weight log. Holds nothing but the
    clock, so a single instance can serve concurrent callers.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def predict(
        self,
        history: Sequence[WeightSample],
        goal_weight_kg: float,
        now: Optional[datetime] = None,
    ) -> PredictionResult:
        if now is None:
            now = self.clock()
        return predict_weight(history, goal_weight_kg, now)
