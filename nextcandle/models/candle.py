"""Candle (OHLC) data model."""

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLC candle.

    Prices are not range-checked here: a candle parsed from free-text input
    may carry NaN fields, and validity is decided by the layout projector.
    """

    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")

    model_config = {"frozen": True}
