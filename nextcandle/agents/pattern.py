"""Pattern Analyst Agent for single-candle analysis.

This agent reads one candle's OHLC (and optional volume) from a chosen
trading perspective and returns a structured reading: candle anatomy,
pattern name, a prediction for the next candle and volume commentary.
"""

import json
import logging
import re
from typing import Optional

from agents import Agent
from pydantic import ValidationError

from nextcandle.agents.base import create_agent, run_agent_sync
from nextcandle.models import AnalysisResult, CandleInput

logger = logging.getLogger(__name__)


PATTERN_ANALYST_INSTRUCTIONS = """You are a professional candlestick analyst.
You write detailed, trader-grade notes about a single candle and forecast the
next one. You always reply with a single valid JSON object and nothing else:
no markdown, no code fences, no commentary outside the JSON.
"""

# Shape the reply must follow; field names match AnalysisResult.
RESPONSE_SCHEMA_HINT = """{
  "current_candle_analysis": string,
  "pattern_identification": {"name": string, "explanation": string},
  "prediction": {
    "next_candle_type": string,
    "direction": "Up" | "Down",
    "projected_move_points": number,
    "projected_move_percentage": number,
    "target_price": number,
    "invalidation_condition": string,
    "extended_target": null | {
      "target_price": number,
      "projected_move_points": number,
      "projected_move_percentage": number,
      "comment": string
    }
  },
  "volume_analysis": string
}"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class AnalysisError(Exception):
    """Raised when the analyst cannot produce a usable AnalysisResult."""


def build_prompt(data: CandleInput) -> str:
    """Build the analysis prompt for a candle.

    Args:
        data: Raw candle input including the analysis timeframe.

    Returns:
        Prompt text.
    """
    perspective = data.analysis_type
    return f"""Analyze the following financial candlestick data for an asset from a {perspective} trading perspective. Provide a highly detailed, professional-grade analysis suitable for a trader's notes.

Asset Data:
Open: {data.open}
High: {data.high}
Low: {data.low}
Close: {data.close}
Volume: {data.volume or 'Not provided'}
Analysis Timeframe: {perspective}

1. Current Candle Analysis:
   - Describe the candle's type (e.g., "small red bearish candle").
   - Give body size and upper/lower shadow lengths in points.
   - Give the full range (High - Low) in points and as a percentage of the open.
   - Interpret these characteristics as market pressure.
   - Add context for the {perspective} timeframe.

2. Pattern Identification:
   - Give a specific classification (e.g., "Momentum Bearish", "High-Wave Spinning Top").
   - Justify it from the candle's metrics (body-to-wick ratio, direction).
   - Explain why it is NOT other similar patterns (e.g., "lacks long wicks for a hammer").
   - State whether it implies continuation or reversal.

3. Prediction:
   - Most probable direction (Up/Down) of the next candle.
   - Projected move in points (often based on this candle's range) and in percent of the close.
   - Final target price.
   - An invalidation condition: a price level or event that would negate the prediction.
   - Optionally an extended target for a higher reward:risk scenario (e.g., 1:2).

4. Volume Commentary:
   - How the volume (or its absence) affects the reliability of the pattern and prediction.
   - Whether it is confirmatory or contradictory.

Reply with one JSON object of this shape:
{RESPONSE_SCHEMA_HINT}"""


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name}")


def parse_analysis(text: str) -> AnalysisResult:
    """Parse the analyst's JSON reply into an AnalysisResult.

    Args:
        text: Raw reply text, optionally wrapped in a code fence.

    Returns:
        Validated AnalysisResult.

    Raises:
        AnalysisError: If the reply is not JSON, holds NaN or Infinity, or
            does not fit the schema.
    """
    cleaned = _CODE_FENCE.sub("", text.strip())
    try:
        payload = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:
        raise AnalysisError(f"Failed to get analysis from AI: reply is not JSON ({e})") from e

    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as e:
        raise AnalysisError(f"Failed to get analysis from AI: {e}") from e


class PatternAnalystAgent:
    """Agent that analyzes a single candle and predicts the next one."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Pattern Analyst Agent.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Pattern Analyst Agent",
            instructions=PATTERN_ANALYST_INSTRUCTIONS,
            model=self.model,
        )

    def analyze(self, data: CandleInput) -> AnalysisResult:
        """Analyze a candle.

        Args:
            data: Raw candle input.

        Returns:
            Structured analysis result.

        Raises:
            AnalysisError: If the agent call fails or its reply is unusable.
        """
        prompt = build_prompt(data)
        try:
            reply = run_agent_sync(self._agent, prompt)
        except Exception as e:
            logger.error("Error analyzing candle data: %s", e)
            raise AnalysisError(f"Failed to get analysis from AI: {e}") from e

        return parse_analysis(reply)
