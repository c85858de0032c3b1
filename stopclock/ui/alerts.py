# stopclock/ui/alerts.py
# Countdown completion alert: announcement line & terminal bell

from __future__ import annotations

from typing import Any

from ..core.session import DisplaySnapshot
from ..term_io.console import get_console


# * Completion callback for TimerEngine.on_completion
class CompletionAlert:
    def __init__(self, muted: bool = False, console: Any = None) -> None:
        self.muted = muted
        self.console = console or get_console()
        self.fired = 0

    def __call__(self, snapshot: DisplaySnapshot) -> None:
        self.fired += 1
        self.console.print("[stopclock.completed]Countdown complete[/]")
        if not self.muted:
            self.console.bell()
