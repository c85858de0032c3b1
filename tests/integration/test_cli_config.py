# tests/integration/test_cli_config.py
# Integration tests for CLI config commands w/ isolated home

import json
from pathlib import Path

from typer.testing import CliRunner

from stopclock.cli.app import app

ENV = {"NO_COLOR": "1", "TERM": "dumb"}


# * Ensure config path command returns isolated temp config location
def test_config_path_returns_isolated_temp_path(isolate_config):
    runner = CliRunner()
    result = runner.invoke(app, ["config", "path"], env=ENV)

    assert result.exit_code == 0
    output = result.stdout.strip()
    assert ".stopclock" in output
    assert Path(output).exists()


# * Ensure config set key value → config get key returns same value
def test_config_set_get_round_trip():
    runner = CliRunner()

    result = runner.invoke(app, ["config", "set", "mode", "countdown"], env=ENV)
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "get", "mode"], env=ENV)
    assert '"countdown"' in result.stdout

    # numeric & boolean values are JSON-coerced
    result = runner.invoke(app, ["config", "set", "countdown_target_ms", "90000"], env=ENV)
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "get", "countdown_target_ms"], env=ENV)
    assert result.stdout.strip() == "90000"

    result = runner.invoke(app, ["config", "set", "muted", "false"], env=ENV)
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "get", "muted"], env=ENV)
    assert result.stdout.strip() == "false"


# * Ensure invalid values & unknown keys are rejected
def test_config_set_rejects_invalid(isolate_config):
    runner = CliRunner()

    result = runner.invoke(app, ["config", "set", "frame_rate", "0"], env=ENV)
    assert result.exit_code != 0
    result = runner.invoke(app, ["config", "set", "theme", "dark"], env=ENV)
    assert result.exit_code != 0
    result = runner.invoke(app, ["config", "get", "theme"], env=ENV)
    assert result.exit_code != 0

    config = json.loads((isolate_config / ".stopclock" / "config.json").read_text())
    assert config["frame_rate"] == 60


# * Ensure list shows every setting & the target in hh:mm:ss.cc
def test_config_list():
    runner = CliRunner()
    result = runner.invoke(app, ["config", "list"], env=ENV)

    assert result.exit_code == 0
    assert "Current Configuration" in result.stdout
    assert "prefer_isolated" in result.stdout
    assert "00:05:00.00" in result.stdout

    bare = runner.invoke(app, ["config"], env=ENV)
    assert bare.exit_code == 0
    assert "countdown_target_ms" in bare.stdout


# * Ensure reset restores defaults
def test_config_reset(isolate_config):
    runner = CliRunner()
    runner.invoke(app, ["config", "set", "tick_rate_ms", "8"], env=ENV)

    result = runner.invoke(app, ["config", "reset"], env=ENV)
    assert result.exit_code == 0

    config = json.loads((isolate_config / ".stopclock" / "config.json").read_text())
    assert config["tick_rate_ms"] == 16
    assert config["muted"] is False
