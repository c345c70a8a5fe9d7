"""Tests for turning predictions into display summaries."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from models.weight_prediction import PredictionResult, Trend
from utils.prediction_formatter import format_weight, summarize_prediction


class TestSummarizePrediction:
    """Tests for summarize_prediction."""

    def test_projection_is_formatted(self) -> None:
        result = PredictionResult(
            predicted_weight_30_days=75.0,
            weekly_change_kg=-0.7,
            days_to_goal=4,
            projected_date=datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc),
            trend=Trend.LOSING,
        )

        summary = summarize_prediction(result, 78.0, 70.0)

        assert summary.has_enough_data
        assert summary.trend_label == "Trending Down"
        assert summary.projected_date_label == "Mar 05, 2026"
        assert summary.days_to_goal == 4
        assert summary.current_weight_kg == 78.0
        assert summary.goal_weight_kg == 70.0

    def test_insufficient_data(self) -> None:
        summary = summarize_prediction(PredictionResult.insufficient_data(), 80.0, 70.0)

        assert not summary.has_enough_data
        assert summary.trend_label is None
        assert summary.projected_date_label is None
        assert summary.days_to_goal is None

    @pytest.mark.parametrize(
        ("trend", "label"),
        [(Trend.GAINING, "Trending Up"), (Trend.STABLE, "Stable")],
    )
    def test_trend_labels(self, trend, label) -> None:
        result = PredictionResult(
            predicted_weight_30_days=80.0, weekly_change_kg=0.0, trend=trend
        )

        summary = summarize_prediction(result, 80.0, 70.0)

        assert summary.trend_label == label
        assert summary.projected_date_label is None


def test_format_weight() -> None:
    assert format_weight(78.44) == "78.4 kg"
    assert format_weight(10) == "10.0 kg"
