# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic test runs

import json
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path / "fake_home"
    fake_home.mkdir()

    # Create isolated .stopclock directory
    stopclock_dir = fake_home / ".stopclock"
    stopclock_dir.mkdir()

    # Create minimal config.json w/ test defaults
    config_data = {
        "mode": "stopwatch",
        "countdown_target_ms": 300000,
        "muted": True,
        "prefer_isolated": True,
        "tick_rate_ms": 16,
        "frame_rate": 60,
        "dev_mode": False,
    }

    config_file = stopclock_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(config_data, f, indent=2)

    # Patch Path.home() to return fake home & drop any env override
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("STOPCLOCK_CONFIG", raising=False)

    # ! reset global settings_manager state & patch its config_path to use isolated location
    from stopclock.config.settings import settings_manager

    settings_manager._settings = None
    settings_manager.config_path = config_file

    # ! reset dev mode cache to pick up isolated settings
    from stopclock.config.dev_mode import reset_dev_mode_cache

    reset_dev_mode_cache()

    # ! reset output manager to NullOutputManager for test isolation
    from stopclock.core.output import reset_output_manager

    reset_output_manager()

    # ! fresh console so a previous test's recording/theme does not leak
    from stopclock.term_io.console import reset_console

    reset_console()

    return fake_home


@pytest.fixture
def manual_clock():
    # Clock double whose acknowledgments are delivered only on flush()
    from tests.test_support.manual_clock import ManualClock

    return ManualClock()


@pytest.fixture
def fake_time():
    # Hand-advanced monotonic source (seconds)
    from tests.test_support.manual_clock import FakeTime

    return FakeTime()
