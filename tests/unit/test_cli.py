"""Tests for the Typer command line entry point."""
import pytest
from typer.testing import CliRunner

from currency_converter.cli.main import INTERRUPTED_MESSAGE, app
from currency_converter.core.conversion import OUT_OF_RANGE_MESSAGE
from currency_converter.providers import StaticRateProvider
from currency_converter.ui.tui.input_handler import InputChannel


runner = CliRunner()


@pytest.fixture
def close_calls(monkeypatch):
    """Record every InputChannel.close call while keeping its behaviour."""
    calls = []
    original = InputChannel.close

    def _close(self):
        calls.append(self.closed)
        original(self)

    monkeypatch.setattr(InputChannel, "close", _close)
    return calls


def test_convert_command(temp_config_file):
    result = runner.invoke(app, ["convert", "usd", "eur", "100", "--config", temp_config_file])
    assert result.exit_code == 0, result.output
    assert "100.00 USD equivale a 90.00 EUR" in result.output


def test_convert_command_invalid_input(temp_config_file):
    result = runner.invoke(app, ["convert", "usd", "xyz", "100", "--config", temp_config_file])
    assert result.exit_code == 2

    result = runner.invoke(app, ["convert", "usd", "eur", "abc", "--config", temp_config_file])
    assert result.exit_code == 2


def test_rates_command(temp_config_file):
    result = runner.invoke(app, ["rates", "--config", temp_config_file])
    assert result.exit_code == 0, result.output
    assert "COP" in result.output


def test_run_with_script(temp_config_file, tmp_path, close_calls):
    script = tmp_path / "session.txt"
    script.write_text("3\nusd\n\n4\njpy\n\n5\n2\n\n6\n\n7\n")

    result = runner.invoke(app, ["run", "--config", temp_config_file, "--script", str(script)])

    assert result.exit_code == 0, result.output
    assert "2.00 USD equivale a 300.00 JPY" in result.output
    assert "Goodbye" in result.output
    assert close_calls == [False]


def test_run_fetch_failure_is_fatal(http_config_file, tmp_path, monkeypatch, close_calls):
    monkeypatch.delenv("FREECURRENCYAPI_API_KEY", raising=False)
    script = tmp_path / "session.txt"
    script.write_text("7\n")

    result = runner.invoke(app, ["run", "--config", http_config_file, "--script", str(script)])

    assert result.exit_code == 1
    assert "could not start" in result.output
    assert "Traceback" not in result.output
    assert close_calls == [False]


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["rates", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_unknown_provider_option(temp_config_file):
    result = runner.invoke(app, ["rates", "--config", temp_config_file, "--provider", "nope"])
    assert result.exit_code == 1
    assert "Unknown provider" in result.output


def test_convert_command_overflow(temp_config_file):
    result = runner.invoke(app, ["convert", "usd", "cop", "1e308", "--config", temp_config_file])
    assert result.exit_code == 2
    assert OUT_OF_RANGE_MESSAGE in result.output
    assert "Traceback" not in result.output


def test_run_interrupted_during_fetch(temp_config_file, tmp_path, monkeypatch, close_calls):
    async def _interrupt(self):
        raise KeyboardInterrupt

    monkeypatch.setattr(StaticRateProvider, "fetch_rates", _interrupt)
    script = tmp_path / "session.txt"
    script.write_text("7\n")

    result = runner.invoke(app, ["run", "--config", temp_config_file, "--script", str(script)])

    assert result.exit_code == 130
    assert INTERRUPTED_MESSAGE in result.output
    assert "Traceback" not in result.output
    assert close_calls == [False]
