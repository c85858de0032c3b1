# stopclock/term_io/console.py
# Shared rich Console for the CLI, the live timer display & the output manager
#
# * Every module imports `console` from here; the proxy lets tests & CLI modes swap the
#   underlying Console without chasing module-level references
# * The stopclock theme is pushed later by initialize_theme() in main_callback()
# * The live display (rich Live) must use get_console() so alerts print above the panel

from __future__ import annotations

from typing import Any, Optional

from rich.console import Console


class _ConsoleProxy:
    __slots__ = ("_target",)

    def __init__(self, target: Console) -> None:
        self._target = target

    def __getattr__(self, name: str) -> Any:
        return getattr(self._target, name)

    def _swap(self, target: Console) -> Console:
        self._target = target
        return target

    def _unwrap(self) -> Console:
        return self._target


console = _ConsoleProxy(Console())


# * Underlying Console (tests may have patched `console` w/ a bare Console)
def get_console() -> Console:
    unwrap = getattr(console, "_unwrap", None)
    if unwrap is not None:
        return unwrap()
    return console  # type: ignore[return-value]


# * Replace the shared Console; only the given options are set
def configure_console(
    width: Optional[int] = None,
    height: Optional[int] = None,
    force_terminal: Optional[bool] = None,
    record: bool = False,
) -> Console:
    options: dict[str, Any] = {
        key: value
        for key, value in (("width", width), ("height", height), ("force_terminal", force_terminal))
        if value is not None
    }
    if record:
        options["record"] = True
    if not options:
        return console._unwrap()
    return console._swap(Console(**options))


# * Fresh default Console (test isolation)
def reset_console() -> Console:
    return console._swap(Console())


__all__ = ["console", "get_console", "configure_console", "reset_console"]
