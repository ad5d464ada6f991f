"""Terminal rendering for nextcandle."""

from nextcandle.render.candle_art import candle_pair, draw_candle, layout_rows

__all__ = ["candle_pair", "draw_candle", "layout_rows"]
