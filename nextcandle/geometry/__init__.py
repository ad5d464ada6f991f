"""Candle geometry: predicted-candle synthesis and layout projection."""

from nextcandle.geometry.synthesizer import (
    DEFAULT_TUNING,
    CandleArchetype,
    WickTuning,
    classify_candle_type,
    synthesize_next_candle,
)
from nextcandle.geometry.projector import is_valid_candle, project_candle

__all__ = [
    "CandleArchetype",
    "WickTuning",
    "DEFAULT_TUNING",
    "classify_candle_type",
    "synthesize_next_candle",
    "is_valid_candle",
    "project_candle",
]
