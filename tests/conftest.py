"""Shared fixtures for nextcandle tests."""

import pytest

from nextcandle.models import (
    AnalysisResult,
    CandleInput,
    ExtendedTarget,
    PatternIdentification,
    Prediction,
)


def make_result(
    next_candle_type: str = "Hammer",
    direction: str = "Down",
    target_price: float = 95.0,
    projected_move_points: float = 5.0,
    pattern_name: str = "Momentum Bearish",
) -> AnalysisResult:
    """Build a complete analysis result."""
    return AnalysisResult(
        current_candle_analysis="Small red bearish candle with a 2 point body.",
        pattern_identification=PatternIdentification(
            name=pattern_name,
            explanation="Not a doji because the body is more than 10% of range.",
        ),
        prediction=Prediction(
            next_candle_type=next_candle_type,
            direction=direction,
            projected_move_points=projected_move_points,
            projected_move_percentage=5.0,
            target_price=target_price,
            invalidation_condition="Invalidated if the next candle closes above 106.",
            extended_target=ExtendedTarget(
                target_price=90.0,
                projected_move_points=10.0,
                projected_move_percentage=10.0,
                comment="For a 1:2 Reward:Risk ratio",
            ),
        ),
        volume_analysis="High volume confirms selling pressure.",
    )


@pytest.fixture
def sample_input() -> CandleInput:
    return CandleInput(open="102", high="105", low="98", close="100", volume="100000")


@pytest.fixture
def sample_result() -> AnalysisResult:
    return make_result()


@pytest.fixture
def nextcandle_home(tmp_path, monkeypatch):
    """Point configuration and storage at a temporary directory."""
    monkeypatch.setenv("NEXTCANDLE_HOME", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    return tmp_path
