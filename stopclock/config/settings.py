# stopclock/config/settings.py
# Configuration management for stopclock: persisted mode & countdown target plus clock tuning

import os
from pathlib import Path
from typing import Dict, Any, Optional, cast
import typer
from dataclasses import dataclass, asdict

from ..term_io.generics import read_json_safe, write_json_safe
from ..core.constants import (
    DEFAULT_COUNTDOWN_MS,
    DEFAULT_FRAME_RATE,
    DEFAULT_TICK_RATE_MS,
    MAX_EDITABLE_MS,
    TimerMode,
)
from ..core.exceptions import JSONParsingError, SettingsValidationError

# environment override for the config file location (also read from .env)
CONFIG_ENV_VAR = "STOPCLOCK_CONFIG"


# * Default settings dataclass for stopclock
@dataclass
class StopclockSettings:
    # persisted timer preferences (initial values for the engine)
    mode: str = TimerMode.STOPWATCH.value
    countdown_target_ms: int = DEFAULT_COUNTDOWN_MS

    # completion alert
    muted: bool = False

    # clock selection & cadence
    prefer_isolated: bool = True
    tick_rate_ms: int = DEFAULT_TICK_RATE_MS
    frame_rate: int = DEFAULT_FRAME_RATE

    # dev mode setting (enables DEBUG output w/ per-message clock tracing)
    dev_mode: bool = False

    def __post_init__(self) -> None:
        # Validate settings values after initialization.
        valid_modes = {m.value for m in TimerMode}
        if self.mode not in valid_modes:
            raise SettingsValidationError(
                f"mode must be one of {sorted(valid_modes)}, got '{self.mode}'",
                "mode",
                self.mode,
            )

        # countdown target: integer ms within the editable range
        if (
            isinstance(self.countdown_target_ms, bool)
            or not isinstance(self.countdown_target_ms, int)
            or not 0 < self.countdown_target_ms <= MAX_EDITABLE_MS
        ):
            raise SettingsValidationError(
                f"countdown_target_ms must be an integer in 1-{MAX_EDITABLE_MS}, "
                f"got {self.countdown_target_ms!r}",
                "countdown_target_ms",
                self.countdown_target_ms,
            )

        # strict bool validation (no coercion)
        for name in ("muted", "prefer_isolated", "dev_mode"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise SettingsValidationError(
                    f"{name} must be a boolean (true/false), "
                    f"got {type(value).__name__}: {value}",
                    name,
                    value,
                )

        # tick cadence: 1ms-1s
        if (
            isinstance(self.tick_rate_ms, bool)
            or not isinstance(self.tick_rate_ms, int)
            or not 1 <= self.tick_rate_ms <= 1000
        ):
            raise SettingsValidationError(
                f"tick_rate_ms must be an integer in 1-1000, got {self.tick_rate_ms!r}",
                "tick_rate_ms",
                self.tick_rate_ms,
            )

        # render cadence: 1-240 frames per second
        if (
            isinstance(self.frame_rate, bool)
            or not isinstance(self.frame_rate, int)
            or not 1 <= self.frame_rate <= 240
        ):
            raise SettingsValidationError(
                f"frame_rate must be an integer in 1-240, got {self.frame_rate!r}",
                "frame_rate",
                self.frame_rate,
            )

    @property
    def timer_mode(self) -> TimerMode:
        return TimerMode(self.mode)


# default config path, honoring STOPCLOCK_CONFIG
def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".stopclock" / "config.json"


# * Settings management class w/ JSON persistence for loading, saving, & modifying settings
class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or default_config_path()
        self._settings: Optional[StopclockSettings] = None

    # load settings from file or return defaults
    def load(self) -> StopclockSettings:
        if self._settings is not None:
            return self._settings

        if self.config_path.exists():
            try:
                data = read_json_safe(self.config_path)
                self._settings = StopclockSettings(**data)
            except (JSONParsingError, TypeError, ValueError, SettingsValidationError) as e:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
                self._settings = StopclockSettings()
        else:
            self._settings = StopclockSettings()

        return self._settings

    # save settings to file
    def save(self, settings: StopclockSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self._settings = settings
        self._notify_settings_changed()

    def _notify_settings_changed(self) -> None:
        from .dev_mode import reset_dev_mode_cache

        reset_dev_mode_cache()

    # get a specific setting value
    def get(self, key: str) -> Any:
        settings = self.load()
        return getattr(settings, key, None)

    # set a specific setting value (re-validated before saving)
    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        if not hasattr(settings, key):
            raise ValueError(f"Unknown setting: {key}")

        data = asdict(settings)
        data[key] = value
        self.save(StopclockSettings(**data))

    # reset to default settings
    def reset(self) -> None:
        self.save(StopclockSettings())

    # list all settings as a dictionary
    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())


# global settings manager instance
settings_manager = SettingsManager()


# * Retrieve settings preferring injected object from Typer context
def get_settings(
    ctx: typer.Context, provided: Optional[StopclockSettings] = None
) -> StopclockSettings:
    # prefer explicitly provided settings
    if provided is not None:
        return provided

    # search ctx, parent, & root for StopclockSettings
    candidates: list[typer.Context] = [ctx]
    parent = cast(Optional[typer.Context], getattr(ctx, "parent", None))
    if parent is not None:
        candidates.append(parent)
    find_root = getattr(ctx, "find_root", None)
    root_ctx = (
        cast(Optional[typer.Context], find_root()) if callable(find_root) else None
    )
    if root_ctx is not None:
        candidates.append(root_ctx)

    for c in candidates:
        obj = getattr(c, "obj", None)
        if isinstance(obj, StopclockSettings):
            return obj

    # fallback to loading from disk
    return settings_manager.load()
