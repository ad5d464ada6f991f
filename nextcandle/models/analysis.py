"""CandleInput and SavedAnalysis data models."""

import math
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from nextcandle.models.candle import Candle
from nextcandle.models.prediction import AnalysisResult


AnalysisType = Literal["Intraday", "Swing", "Positional"]

ANALYSIS_TYPES: tuple[str, ...] = ("Intraday", "Swing", "Positional")


def parse_price(text: Optional[str]) -> float:
    """Parse a user-entered price, returning NaN when it is blank or garbage."""
    if text is None:
        return math.nan
    try:
        return float(text.strip())
    except ValueError:
        return math.nan


class CandleInput(BaseModel):
    """Raw candle values as the user typed them."""

    open: str = Field(default="", description="Opening price text")
    high: str = Field(default="", description="High price text")
    low: str = Field(default="", description="Low price text")
    close: str = Field(default="", description="Closing price text")
    volume: str = Field(default="", description="Volume text (optional)")
    analysis_type: AnalysisType = Field(
        default="Intraday", description="Trading timeframe perspective"
    )

    model_config = {"frozen": True}

    def to_candle(self) -> Candle:
        """Parse the price fields into a Candle (unparseable fields become NaN)."""
        return Candle(
            open=parse_price(self.open),
            high=parse_price(self.high),
            low=parse_price(self.low),
            close=parse_price(self.close),
        )


class SavedAnalysis(BaseModel):
    """A persisted analysis: the raw input and the analyst's result."""

    id: str = Field(..., min_length=1, description="Record identifier")
    timestamp: datetime = Field(default_factory=datetime.now, description="Save time")
    data: CandleInput
    result: AnalysisResult

    model_config = {"frozen": True}
