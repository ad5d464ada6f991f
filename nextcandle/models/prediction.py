"""Prediction and AnalysisResult data models."""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class ExtendedTarget(BaseModel):
    """A further target for a higher reward:risk scenario."""

    target_price: float = Field(..., description="Extended target price")
    projected_move_points: float = Field(..., description="Extended move in points")
    projected_move_percentage: float = Field(..., description="Extended move in percent")
    comment: str = Field(default="", description="e.g. 'For a 1:2 Reward:Risk ratio'")

    model_config = {"frozen": True}


class Prediction(BaseModel):
    """The analyst's forecast for the next candle."""

    next_candle_type: str = Field(
        ..., description="Free-text candle label (e.g., 'Bullish Hammer')"
    )
    direction: Literal["Up", "Down"] = Field(..., description="Predicted direction")
    projected_move_points: float = Field(..., description="Projected move in points")
    target_price: float = Field(..., description="Target price for the next candle")
    projected_move_percentage: float = Field(
        default=0.0, description="Projected move in percent of the close"
    )
    invalidation_condition: str = Field(
        default="", description="Condition that would void the prediction"
    )
    extended_target: Optional[ExtendedTarget] = Field(
        default=None, description="Optional extended target"
    )

    model_config = {"frozen": True}


class PatternIdentification(BaseModel):
    """Named pattern for the current candle and the reasoning behind it."""

    name: str = Field(..., description="Pattern name (e.g., 'Momentum Bearish')")
    explanation: str = Field(default="", description="Why this pattern and not others")

    model_config = {"frozen": True}


class AnalysisResult(BaseModel):
    """Full reading returned by the pattern analyst."""

    current_candle_analysis: str = Field(..., description="Narrative candle analysis")
    pattern_identification: PatternIdentification
    prediction: Prediction
    volume_analysis: str = Field(default="", description="Volume commentary")

    model_config = {"frozen": True}
