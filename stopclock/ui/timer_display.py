# stopclock/ui/timer_display.py
# Rich renderables for the timer readout & the Live-backed render surface

from __future__ import annotations

from rich.align import Align
from rich.console import Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..core.constants import TimerMode, TimerState
from ..core.session import DisplaySnapshot

_STATE_STYLES = {
    TimerState.IDLE: "stopclock.idle",
    TimerState.RUNNING: "stopclock.running",
    TimerState.PAUSED: "stopclock.paused",
    TimerState.COMPLETED: "stopclock.completed",
}


# * Time readout: large hh:mm:ss w/ dimmed .cc
def render_readout(snapshot: DisplaySnapshot) -> Text:
    parts = snapshot.parts
    text = Text()
    text.append(parts.main, style="stopclock.digits")
    text.append(parts.fraction, style="stopclock.fraction")
    return text


# * Mode & run state caption shown under the readout
def render_status(snapshot: DisplaySnapshot, clock_name: str | None = None) -> Text:
    mode_label = "Countdown" if snapshot.mode is TimerMode.COUNTDOWN else "Stopwatch"
    status = Text()
    status.append(mode_label, style="stopclock.accent")
    status.append(" · ")
    status.append(snapshot.run_state.value, style=_STATE_STYLES[snapshot.run_state])
    if clock_name:
        status.append(f"  [{clock_name} clock]", style="dim")
    return status


# * Full panel renderable for one frame
def render_timer(snapshot: DisplaySnapshot, clock_name: str | None = None) -> RenderableType:
    body = Group(
        Align.center(render_readout(snapshot)),
        Align.center(render_status(snapshot, clock_name)),
    )
    return Panel(body, border_style=_STATE_STYLES[snapshot.run_state], padding=(1, 4))


# * Render surface writing each frame into a rich Live display
# Live should be created w/ auto_refresh=False so frames follow the render loop's cadence
class LiveSurface:
    def __init__(self, live: Live, clock_name: str | None = None) -> None:
        self.live = live
        self.clock_name = clock_name

    def __call__(self, snapshot: DisplaySnapshot) -> None:
        self.live.update(render_timer(snapshot, self.clock_name), refresh=True)
