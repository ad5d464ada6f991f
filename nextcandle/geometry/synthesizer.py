"""Predicted-candle synthesis.

Turns an analyst's prediction (a free-text candle label plus a target price
and projected move) into a concrete OHLC candle whose wicks follow the
visual convention of the named archetype: a hammer gets a long lower shadow,
a shooting star a long upper one, a doji symmetric shadows and a marubozu
none at all.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from nextcandle.models import Candle, Prediction


class CandleArchetype(str, Enum):
    """Wick shapes the synthesizer knows how to draw."""

    MARUBOZU = "marubozu"
    HAMMER = "hammer"
    INVERTED_HAMMER = "inverted_hammer"
    DOJI = "doji"
    UNRECOGNIZED = "unrecognized"


# Substrings checked in order; the first archetype with a hit wins.
ARCHETYPE_KEYWORDS: tuple[tuple[CandleArchetype, tuple[str, ...]], ...] = (
    (CandleArchetype.MARUBOZU, ("marubozu",)),
    (CandleArchetype.INVERTED_HAMMER, ("inverted hammer", "shooting star")),
    (CandleArchetype.HAMMER, ("hammer", "hanging man")),
    (CandleArchetype.DOJI, ("doji", "spinning top")),
)


class WickTuning(BaseModel):
    """Visual proportion constants used when sizing wicks."""

    base_wick_ratio: float = Field(
        default=0.15, ge=0, description="Base wick as a fraction of move (or body)"
    )
    dominant_wick_ratio: float = Field(
        default=2.5, ge=0, description="Long shadow of hammer-type candles, in bodies"
    )
    minor_wick_ratio: float = Field(
        default=0.1, ge=0, description="Short shadow of hammer-type candles, in bodies"
    )
    doji_wick_multiplier: float = Field(
        default=2.0, ge=0, description="Doji shadow length, in bodies"
    )
    doji_body_threshold: float = Field(
        default=0.1, ge=0, description="Body size below which doji wicks use the move"
    )
    fallback_wick: float = Field(
        default=1.0, ge=0, description="Base wick when both move and body are zero"
    )

    model_config = {"frozen": True}


DEFAULT_TUNING = WickTuning()


def classify_candle_type(label: Optional[str]) -> CandleArchetype:
    """Map a free-text candle label onto a known archetype.

    Matching is case-insensitive and by substring, so verbose labels such as
    "Bullish Hammer Reversal" still resolve. Anything else, including an
    empty label, is UNRECOGNIZED.
    """
    text = (label or "").lower()
    for archetype, keywords in ARCHETYPE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return archetype
    return CandleArchetype.UNRECOGNIZED


def _base_wick(move_size: float, body_size: float, tuning: WickTuning) -> float:
    from_move = move_size * tuning.base_wick_ratio
    if from_move > 0:
        return from_move
    from_body = body_size * tuning.base_wick_ratio
    if from_body > 0:
        return from_body
    return tuning.fallback_wick


def synthesize_next_candle(
    prediction: Prediction,
    current_candle: Candle,
    tuning: Optional[WickTuning] = None,
) -> Candle:
    """Build the predicted next candle.

    The candle opens at the current close and closes at the target price;
    high and low are then shaped by the archetype of
    ``prediction.next_candle_type``.

    Args:
        prediction: Analyst prediction (label, target price, projected move).
        current_candle: The candle the prediction was made from.
        tuning: Optional wick constants. Defaults to DEFAULT_TUNING.

    Returns:
        A Candle satisfying low <= min(open, close) and
        high >= max(open, close). If the current close or the target price
        is not finite, high and low are NaN.
    """
    tuning = tuning or DEFAULT_TUNING

    open_price = current_candle.close
    close_price = prediction.target_price

    if not (math.isfinite(open_price) and math.isfinite(close_price)):
        return Candle(open=open_price, high=math.nan, low=math.nan, close=close_price)

    body_top = max(open_price, close_price)
    body_bottom = min(open_price, close_price)
    high = body_top
    low = body_bottom

    body_size = body_top - body_bottom
    move_points = prediction.projected_move_points
    move_size = abs(move_points) if math.isfinite(move_points) else 0.0

    archetype = classify_candle_type(prediction.next_candle_type)
    if archetype is CandleArchetype.MARUBOZU:
        return Candle(open=open_price, high=high, low=low, close=close_price)

    base_wick = _base_wick(move_size, body_size, tuning)
    high += base_wick
    low -= base_wick

    if archetype is CandleArchetype.HAMMER:
        low = min(low, body_bottom - (body_size * tuning.dominant_wick_ratio + base_wick))
        high = max(body_top + (body_size * tuning.minor_wick_ratio + base_wick), high)
    elif archetype is CandleArchetype.INVERTED_HAMMER:
        high = max(high, body_top + (body_size * tuning.dominant_wick_ratio + base_wick))
        low = body_bottom - (body_size * tuning.minor_wick_ratio + base_wick)
    elif archetype is CandleArchetype.DOJI:
        if body_size > tuning.doji_body_threshold:
            wick = body_size * tuning.doji_wick_multiplier
        else:
            wick = move_size
        high = body_top + wick
        low = body_bottom - wick

    high = max(high, open_price, close_price)
    low = min(low, open_price, close_price)

    return Candle(open=open_price, high=high, low=low, close=close_price)
