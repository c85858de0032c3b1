# tests/unit/ui/test_timer_display.py
# Unit tests for timer renderables, the Live surface & the completion alert

from unittest.mock import MagicMock

from rich.console import Console

from stopclock.core.constants import TimerMode, TimerState
from stopclock.core.session import DisplaySnapshot
from stopclock.ui.alerts import CompletionAlert
from stopclock.ui.console_theme import STOPCLOCK_THEME
from stopclock.ui.timer_display import LiveSurface, render_readout, render_timer


def recording_console():
    return Console(record=True, width=60, force_terminal=True, theme=STOPCLOCK_THEME)


# * Verify readout splits main digits & fraction
def test_readout_text():
    snapshot = DisplaySnapshot(TimerMode.STOPWATCH, 12345, TimerState.PAUSED)
    assert render_readout(snapshot).plain == "00:00:12.34"


# * Verify panel shows digits, mode, state & clock name
def test_render_timer_panel():
    console = recording_console()
    snapshot = DisplaySnapshot(TimerMode.COUNTDOWN, 65000, TimerState.RUNNING)

    console.print(render_timer(snapshot, "isolated"))
    output = console.export_text()

    assert "00:01:05.00" in output
    assert "Countdown" in output
    assert "running" in output
    assert "isolated clock" in output


# * Verify Live surface pushes a refreshed renderable
def test_live_surface_updates():
    live = MagicMock()
    surface = LiveSurface(live, "fallback")

    surface(DisplaySnapshot(TimerMode.STOPWATCH, 0, TimerState.IDLE))

    live.update.assert_called_once()
    assert live.update.call_args.kwargs == {"refresh": True}


class TestCompletionAlert:

    # * Verify alert announces & rings the bell
    def test_rings_bell(self):
        console = MagicMock()
        alert = CompletionAlert(console=console)

        alert(DisplaySnapshot(TimerMode.COUNTDOWN, 0, TimerState.COMPLETED))

        assert alert.fired == 1
        console.bell.assert_called_once()
        assert "Countdown complete" in console.print.call_args.args[0]

    # * Verify muted alert stays silent but still announces
    def test_muted(self):
        console = MagicMock()
        alert = CompletionAlert(muted=True, console=console)

        alert(DisplaySnapshot(TimerMode.COUNTDOWN, 0, TimerState.COMPLETED))

        console.bell.assert_not_called()
        console.print.assert_called_once()
