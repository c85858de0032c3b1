# stopclock/cli/commands/run.py
# Run the timer w/ a live terminal display until Ctrl+C, a time limit, or countdown completion

from __future__ import annotations

import threading
import time
from typing import Optional

import typer
from rich.live import Live

from ...clock.factory import create_clock_source
from ...config.settings import get_settings, settings_manager
from ...core.constants import TimerMode, TimerState
from ...core.engine import TimerEngine
from ...core.timecodec import ms_to_string
from ...core.verbose import vlog_config
from ...term_io.console import console, get_console
from ...ui.alerts import CompletionAlert
from ...ui.render_loop import RenderLoop
from ...ui.timer_display import LiveSurface
from ..app import app
from ..decorators import handle_stopclock_error

# how long to wait for the clock to acknowledge the final pause
_PAUSE_ACK_TIMEOUT_S = 2.0


# * Block until countdown completion, the optional time limit, or Ctrl+C
def _wait_until_done(finished: threading.Event, limit_s: Optional[float]) -> None:
    deadline = time.monotonic() + limit_s if limit_s is not None else None
    while not finished.wait(0.05):
        if deadline is not None and time.monotonic() >= deadline:
            return


# * Persist mode & countdown target for the next run
# ! a zero target is never saved (settings require 1ms+); the mode still is
def _save_preferences(engine: TimerEngine) -> None:
    settings_manager.set("mode", engine.mode.value)
    if engine.mode is not TimerMode.COUNTDOWN:
        return
    if engine.target_ms == 0:
        console.print(
            f"[warning]Countdown target {ms_to_string(0)} not saved; "
            "the saved target is unchanged[/]"
        )
        return
    settings_manager.set("countdown_target_ms", engine.target_ms)


# final one-line summary printed after the live display closes
def _summary(engine: TimerEngine) -> str:
    if engine.mode is TimerMode.COUNTDOWN:
        if engine.run_state is TimerState.COMPLETED:
            return f"[stopclock.completed]Countdown complete[/] ({ms_to_string(engine.target_ms)})"
        remaining = engine.snapshot().text
        return f"[stopclock.paused]Countdown paused[/] with {remaining} remaining"
    return f"[stopclock.accent]Stopwatch stopped at[/] {ms_to_string(engine.elapsed_ms)}"


# * Start a stopwatch or countdown in the terminal
@app.command()
@handle_stopclock_error
def run(
    ctx: typer.Context,
    mode: Optional[TimerMode] = typer.Option(
        None, "--mode", "-m", case_sensitive=False, help="stopwatch or countdown (default: saved mode)"
    ),
    time_text: Optional[str] = typer.Option(
        None,
        "--time",
        "-t",
        help="Starting time (stopwatch) or countdown target, as hh:mm:ss.cs",
    ),
    fallback: bool = typer.Option(
        False, "--fallback", help="Use the in-process fallback clock instead of the isolated process"
    ),
    limit: Optional[float] = typer.Option(
        None, "--for", min=0.0, help="Stop automatically after this many seconds"
    ),
    mute: Optional[bool] = typer.Option(
        None, "--mute/--no-mute", help="Silence the completion bell (default: saved setting)"
    ),
    save: bool = typer.Option(
        False, "--save", help="Remember the mode & countdown target for next time"
    ),
) -> None:
    settings = get_settings(ctx)
    selected_mode = mode or settings.timer_mode
    prefer_isolated = settings.prefer_isolated and not fallback
    vlog_config("mode", selected_mode.value)
    vlog_config("prefer_isolated", prefer_isolated)

    clock = create_clock_source(prefer_isolated=prefer_isolated, tick_rate_ms=settings.tick_rate_ms)
    engine = TimerEngine(
        clock,
        mode=selected_mode,
        target_ms=settings.countdown_target_ms,
        tick_rate_ms=settings.tick_rate_ms,
    )

    try:
        if time_text is not None:
            engine.edit_time(time_text)
        if save:
            _save_preferences(engine)

        finished = threading.Event()
        engine.on_completion(CompletionAlert(muted=settings.muted if mute is None else mute))
        engine.on_completion(lambda _snapshot: finished.set())

        with Live(console=get_console(), auto_refresh=False, transient=False) as live:
            loop = RenderLoop(
                engine, LiveSurface(live, engine.clock.name), frame_rate=settings.frame_rate
            )
            try:
                engine.start()
                _wait_until_done(finished, limit)
            except KeyboardInterrupt:
                pass
            finally:
                engine.pause()
                engine.wait_for(lambda s: not s.is_running, timeout=_PAUSE_ACK_TIMEOUT_S)
                loop.close()
                loop.render_once()
    finally:
        engine.close()

    console.print(_summary(engine))
