"""CLI commands for nextcandle.

This package provides the command-line interface for nextcandle,
including candle analysis, drawing and saved-analysis history.
"""

from nextcandle.cli.main import cli, main

__all__ = ["cli", "main"]
