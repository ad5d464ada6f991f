"""nextcandle - AI candlestick analyzer with predicted-candle drawing."""

__version__ = "0.1.0"
