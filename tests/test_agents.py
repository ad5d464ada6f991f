"""Tests for the Pattern Analyst Agent.

The Agents SDK call is patched out; these tests cover prompt building and
reply handling.
"""

import json
from unittest.mock import patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from nextcandle.agents import (
    AnalysisError,
    PatternAnalystAgent,
    build_prompt,
    get_model,
    parse_analysis,
)
from nextcandle.agents.base import DEFAULT_MODEL
from nextcandle.models import AnalysisResult, CandleInput


class TestBuildPrompt:
    """The prompt carries the candle and the trading perspective."""

    def test_includes_prices(self, sample_input: CandleInput):
        prompt = build_prompt(sample_input)

        assert "Open: 102" in prompt
        assert "High: 105" in prompt
        assert "Low: 98" in prompt
        assert "Close: 100" in prompt
        assert "Volume: 100000" in prompt

    def test_missing_volume(self):
        prompt = build_prompt(CandleInput(open="1", high="2", low="0", close="1"))
        assert "Volume: Not provided" in prompt

    @pytest.mark.parametrize("analysis_type", ["Intraday", "Swing", "Positional"])
    def test_includes_perspective(self, analysis_type: str):
        prompt = build_prompt(CandleInput(analysis_type=analysis_type))
        assert f"{analysis_type} trading perspective" in prompt
        assert f"Analysis Timeframe: {analysis_type}" in prompt

    def test_asks_for_json_fields(self, sample_input: CandleInput):
        prompt = build_prompt(sample_input)
        for field in ("next_candle_type", "target_price", "invalidation_condition"):
            assert field in prompt


class TestParseAnalysis:
    """Replies are validated into AnalysisResult or rejected with AnalysisError."""

    def test_plain_json(self, sample_result: AnalysisResult):
        assert parse_analysis(sample_result.model_dump_json()) == sample_result

    def test_fenced_json(self, sample_result: AnalysisResult):
        reply = f"```json\n{sample_result.model_dump_json()}\n```"
        assert parse_analysis(reply) == sample_result

    def test_extended_target_optional(self, sample_result: AnalysisResult):
        payload = sample_result.model_dump()
        payload["prediction"]["extended_target"] = None

        result = parse_analysis(json.dumps(payload))
        assert result.prediction.extended_target is None

    def test_not_json(self):
        with pytest.raises(AnalysisError, match="Failed to get analysis from AI"):
            parse_analysis("The next candle will probably be green.")

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_numbers_rejected(self, sample_result: AnalysisResult, constant: str):
        """Non-finite prices would not survive a save and reload, so they are refused."""
        reply = sample_result.model_dump_json().replace(
            '"target_price":95.0', f'"target_price":{constant}', 1
        )
        assert constant in reply

        with pytest.raises(AnalysisError, match="non-finite"):
            parse_analysis(reply)

    def test_schema_mismatch(self, sample_result: AnalysisResult):
        payload = sample_result.model_dump()
        payload["prediction"]["direction"] = "Sideways"

        with pytest.raises(AnalysisError):
            parse_analysis(json.dumps(payload))

    @given(text=st.text(max_size=200))
    @settings(max_examples=100)
    def test_arbitrary_text_never_crashes(self, text: str):
        """*For any* reply text, parsing either succeeds or raises AnalysisError."""
        try:
            result = parse_analysis(text)
        except AnalysisError:
            return
        assert isinstance(result, AnalysisResult)


class TestPatternAnalystAgent:
    """The agent wraps SDK failures in AnalysisError."""

    def test_analyze(self, sample_input, sample_result):
        with patch(
            "nextcandle.agents.pattern.run_agent_sync",
            return_value=sample_result.model_dump_json(),
        ) as mock_run:
            result = PatternAnalystAgent(model="test-model").analyze(sample_input)

        assert result == sample_result
        agent, prompt = mock_run.call_args.args
        assert agent.model == "test-model"
        assert "Open: 102" in prompt

    def test_sdk_error_wrapped(self, sample_input):
        with patch(
            "nextcandle.agents.pattern.run_agent_sync",
            side_effect=RuntimeError("rate limited"),
        ):
            with pytest.raises(AnalysisError, match="rate limited"):
                PatternAnalystAgent().analyze(sample_input)


class TestModelSelection:
    """Model precedence: explicit override, then OPENAI_MODEL, then default."""

    def test_override(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "env-model")
        assert get_model("flag-model") == "flag-model"

    def test_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "env-model")
        assert get_model() == "env-model"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        assert get_model() == DEFAULT_MODEL
