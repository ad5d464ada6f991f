"""Tests for the nextcandle CLI.

The Pattern Analyst Agent is patched out; commands run against a
temporary NEXTCANDLE_HOME.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from nextcandle.cli import cli
from nextcandle.config import get_db_path
from nextcandle.db.store import AnalysisStore

CANDLE_ARGS = ["-o", "102", "-H", "105", "-l", "98", "-c", "100"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store(nextcandle_home):
    return AnalysisStore(get_db_path())


@pytest.fixture
def mock_agent(sample_result):
    with patch("nextcandle.agents.PatternAnalystAgent") as mock_cls:
        mock_cls.return_value.analyze.return_value = sample_result
        yield mock_cls


class TestMainGroup:
    """The group lists its lazily loaded commands."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("analyze", "draw", "history", "init"):
            assert name in result.output


class TestAnalyzeCommand:
    """analyze validates, calls the analyst, draws, and optionally saves."""

    def test_invalid_candle_rejected_before_analysis(
        self, runner, nextcandle_home, mock_agent, monkeypatch
    ):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        result = runner.invoke(
            cli, ["analyze", "-o", "110", "-H", "105", "-l", "98", "-c", "100"]
        )

        assert result.exit_code == 1
        assert "Invalid Candle" in result.output
        mock_agent.assert_not_called()

    def test_unparseable_price_rejected(self, runner, nextcandle_home, mock_agent, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        result = runner.invoke(
            cli, ["analyze", "-o", "abc", "-H", "105", "-l", "98", "-c", "100"]
        )

        assert result.exit_code == 1
        mock_agent.assert_not_called()

    def test_missing_api_key(self, runner, nextcandle_home, mock_agent):
        result = runner.invoke(cli, ["analyze", *CANDLE_ARGS])

        assert result.exit_code == 1
        assert "API key" in result.output
        mock_agent.assert_not_called()

    def test_analysis_displayed(self, runner, nextcandle_home, mock_agent, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        result = runner.invoke(cli, ["analyze", *CANDLE_ARGS, "-t", "swing"])

        assert result.exit_code == 0, result.output
        assert "Visual Analysis (Swing)" in result.output
        assert "Momentum Bearish" in result.output
        assert "Hammer" in result.output
        assert "Volume Commentary" in result.output

        data = mock_agent.return_value.analyze.call_args.args[0]
        assert data.analysis_type == "Swing"
        assert data.close == "100"

    def test_model_flag(self, runner, nextcandle_home, mock_agent, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        runner.invoke(cli, ["analyze", *CANDLE_ARGS, "--model", "my-model"])

        mock_agent.assert_called_once_with(model="my-model")

    def test_save(self, runner, store, mock_agent, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        result = runner.invoke(cli, ["analyze", *CANDLE_ARGS, "--save"])

        assert result.exit_code == 0, result.output
        saved = store.list_analyses()
        assert len(saved) == 1
        assert saved[0].data.open == "102"
        assert "Saved analysis" in result.output

    def test_not_saved_by_default(self, runner, store, mock_agent, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        runner.invoke(cli, ["analyze", *CANDLE_ARGS])

        assert store.list_analyses() == []

    def test_analysis_error(self, runner, nextcandle_home, monkeypatch):
        from nextcandle.agents import AnalysisError

        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        with patch("nextcandle.agents.PatternAnalystAgent") as mock_cls:
            mock_cls.return_value.analyze.side_effect = AnalysisError(
                "Failed to get analysis from AI: boom"
            )
            result = runner.invoke(cli, ["analyze", *CANDLE_ARGS])

        assert result.exit_code == 1
        assert "Analysis Error" in result.output


class TestDrawCommand:
    """draw projects and draws a standalone candle."""

    def test_valid_candle(self, runner, nextcandle_home):
        result = runner.invoke(cli, ["draw", "95", "110", "90", "105"])

        assert result.exit_code == 0, result.output
        assert "Bullish" in result.output
        assert "25.00%" in result.output
        assert "50.00%" in result.output

    def test_invalid_candle(self, runner, nextcandle_home):
        result = runner.invoke(cli, ["draw", "10", "5", "1", "8"])

        assert result.exit_code == 0
        assert "Invalid Data" in result.output

    def test_overflowing_range_is_invalid(self, runner, nextcandle_home):
        result = runner.invoke(cli, ["draw", "1e308", "1.5e308", "-1.5e308", "-1e308"])

        assert result.exit_code == 0, result.output
        assert "Invalid Data" in result.output

    def test_degenerate_candle(self, runner, nextcandle_home):
        result = runner.invoke(cli, ["draw", "5", "5", "5", "5"])

        assert result.exit_code == 0
        assert "Zero range" in result.output


class TestHistoryCommands:
    """history list/show/delete operate on saved analyses."""

    def test_list_empty(self, runner, store):
        result = runner.invoke(cli, ["history", "list"])

        assert result.exit_code == 0
        assert "No saved analyses" in result.output

    def test_list(self, runner, store, sample_input, sample_result):
        saved = store.save_analysis(sample_input, sample_result)
        result = runner.invoke(cli, ["history", "list"])

        assert result.exit_code == 0
        assert saved.id[:8] in result.output
        assert "Intraday" in result.output

    def test_show_recomputes_prediction(self, runner, store, sample_input, sample_result):
        saved = store.save_analysis(sample_input, sample_result)
        result = runner.invoke(cli, ["history", "show", saved.id[:8]])

        assert result.exit_code == 0, result.output
        assert "Visual Analysis (Intraday)" in result.output
        assert "Prediction" in result.output

    def test_show_unknown(self, runner, store):
        result = runner.invoke(cli, ["history", "show", "nope"])

        assert result.exit_code == 1
        assert "Not Found" in result.output

    def test_delete(self, runner, store, sample_input, sample_result):
        saved = store.save_analysis(sample_input, sample_result)
        result = runner.invoke(cli, ["history", "delete", saved.id])

        assert result.exit_code == 0
        assert store.get_analysis(saved.id) is None

    def test_delete_unknown(self, runner, store):
        result = runner.invoke(cli, ["history", "delete", "nope"])
        assert result.exit_code == 1


class TestInitCommand:
    """init writes a template config once."""

    def test_creates_config(self, runner, nextcandle_home):
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert (nextcandle_home / "config.toml").exists()

    def test_does_not_overwrite(self, runner, nextcandle_home):
        config_path = nextcandle_home / "config.toml"
        config_path.write_text("[openai]\nmodel = \"mine\"\n")

        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "mine" in config_path.read_text()

    def test_force_overwrites(self, runner, nextcandle_home):
        config_path = nextcandle_home / "config.toml"
        config_path.write_text("[openai]\nmodel = \"mine\"\n")

        runner.invoke(cli, ["init", "--force"])

        assert "mine" not in config_path.read_text()
