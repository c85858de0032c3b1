# stopclock/cli/commands/config.py
# Settings mgmt subcommands for stopclock (list/get/set/reset/path) w/ JSON-backed storage

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any
import typer
from builtins import list as builtin_list

from ...config.settings import settings_manager, StopclockSettings
from ...core.timecodec import ms_to_string
from ...term_io.console import console
from ..app import app

# * Sub-app for config commands; registered on root app
config_app = typer.Typer(
    rich_markup_mode="rich", help="[stopclock.accent2]Manage stopclock settings[/]"
)
app.add_typer(config_app, name="config")


# concise set of known keys for validation
def _known_keys() -> set[str]:
    return {f.name for f in fields(StopclockSettings)}


# coerce string value to JSON value (numbers, bools, null) or keep raw string
def _coerce_value(
    raw: str,
) -> str | int | float | bool | None | builtin_list[Any] | dict[str, Any]:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


# * Print current settings & config path
def _print_current_settings() -> None:
    data = settings_manager.list_settings()

    console.print()
    console.print("[stopclock.accent]Current Configuration[/]")
    console.print(f"[dim]Config file: {settings_manager.config_path}[/]")
    console.print()

    for key, value in data.items():
        line = f"  [stopclock.accent2]{key}[/]: {json.dumps(value)}"
        if key == "countdown_target_ms":
            line += f" [dim]({ms_to_string(value)})[/]"
        console.print(line, highlight=False)

    console.print()


# * default callback: show current settings when no subcommand provided
@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _print_current_settings()


# * Get a specific setting value & print as JSON
@config_app.command()
def get(key: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")
    value = settings_manager.get(key)
    console.print(json.dumps(value), highlight=False)


# * Set a specific setting value; values are JSON-coerced when possible
@config_app.command(name="set")
def set_cmd(key: str, value: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")

    coerced = _coerce_value(value)
    try:
        settings_manager.set(key, coerced)
    except Exception as e:
        raise typer.BadParameter(str(e))
    console.print(f"[green]✓[/] Set {key} = {json.dumps(coerced)}", highlight=False)


# * Reset all settings to defaults
@config_app.command()
def reset() -> None:
    settings_manager.reset()
    console.print("[green]✓[/] Reset settings to defaults")


# * Show the configuration file path
@config_app.command()
def path() -> None:
    console.print(str(settings_manager.config_path), highlight=False, soft_wrap=True)


# * Explicit 'list' command to show current settings
@config_app.command()
# noqa: A003 - allow command name 'list'
def list() -> None:
    _print_current_settings()
