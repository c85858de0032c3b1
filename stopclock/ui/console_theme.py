# stopclock/ui/console_theme.py
# Console theme for rich markup styles used across stopclock output

from __future__ import annotations

from rich.theme import Theme, ThemeStackError

from ..term_io.console import console

# named styles referenced in markup (e.g. "[stopclock.accent]")
STOPCLOCK_THEME = Theme(
    {
        "stopclock.accent": "bold cyan",
        "stopclock.accent2": "magenta",
        "stopclock.digits": "bold white",
        "stopclock.fraction": "dim white",
        "stopclock.running": "green",
        "stopclock.paused": "yellow",
        "stopclock.completed": "bold red",
        "stopclock.idle": "dim",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim magenta",
    }
)


# * Push the stopclock theme onto the shared console (replacing a previous push)
def initialize_theme() -> None:
    try:
        console.pop_theme()
    except ThemeStackError:
        pass  # nothing pushed yet
    console.push_theme(STOPCLOCK_THEME)
