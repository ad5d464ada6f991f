"""RenderLayout data model."""

from enum import Enum
from pydantic import BaseModel, Field


class LayoutIssue(str, Enum):
    """Reasons a candle cannot be laid out proportionally."""

    INVALID = "invalid"        # NaN field or OHLC ordering broken
    DEGENERATE = "degenerate"  # valid, but high == low


class RenderLayout(BaseModel):
    """Proportions of a candle, as percentages of its high-low range."""

    top_wick_pct: float = Field(..., ge=0, le=100, description="Upper wick height")
    body_top_pct: float = Field(..., ge=0, le=100, description="Offset of body top")
    body_height_pct: float = Field(..., ge=0, le=100, description="Body height")
    bottom_wick_pct: float = Field(..., ge=0, le=100, description="Lower wick height")
    is_bullish: bool = Field(..., description="True when close > open")

    model_config = {"frozen": True}
