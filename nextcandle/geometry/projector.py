"""Candle layout projection.

Turns an OHLC candle into percentages of its high-low range so that a
renderer can size wicks and body proportionally.
"""

import math
from typing import Union

from nextcandle.models import Candle, LayoutIssue, RenderLayout


def is_valid_candle(candle: Candle) -> bool:
    """Check that prices and range are finite and open/close sit inside [low, high]."""
    prices = (candle.open, candle.high, candle.low, candle.close)
    if not all(math.isfinite(price) for price in prices):
        return False
    if candle.high < candle.low:
        return False
    if not math.isfinite(candle.high - candle.low):
        return False
    return (
        candle.low <= candle.open <= candle.high
        and candle.low <= candle.close <= candle.high
    )


def project_candle(candle: Candle) -> Union[RenderLayout, LayoutIssue]:
    """Project a candle onto a proportional layout.

    Returns:
        A RenderLayout, or LayoutIssue.INVALID for malformed candles, or
        LayoutIssue.DEGENERATE for a valid candle with zero range.
    """
    if not is_valid_candle(candle):
        return LayoutIssue.INVALID

    price_range = candle.high - candle.low
    if price_range == 0:
        return LayoutIssue.DEGENERATE

    body_top = max(candle.open, candle.close)
    body_bottom = min(candle.open, candle.close)
    top_wick_pct = (candle.high - body_top) / price_range * 100

    return RenderLayout(
        top_wick_pct=top_wick_pct,
        body_top_pct=top_wick_pct,
        body_height_pct=abs(candle.open - candle.close) / price_range * 100,
        bottom_wick_pct=(body_bottom - candle.low) / price_range * 100,
        is_bullish=candle.close > candle.open,
    )
