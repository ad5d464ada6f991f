"""Data models for nextcandle."""

from nextcandle.models.candle import Candle
from nextcandle.models.prediction import (
    AnalysisResult,
    ExtendedTarget,
    PatternIdentification,
    Prediction,
)
from nextcandle.models.analysis import (
    ANALYSIS_TYPES,
    CandleInput,
    SavedAnalysis,
    parse_price,
)
from nextcandle.models.layout import LayoutIssue, RenderLayout

__all__ = [
    "Candle",
    "Prediction",
    "ExtendedTarget",
    "PatternIdentification",
    "AnalysisResult",
    "CandleInput",
    "SavedAnalysis",
    "ANALYSIS_TYPES",
    "parse_price",
    "LayoutIssue",
    "RenderLayout",
]
