# stopclock/ui/render_loop.py
# Frame-aligned display refresher: pulls the engine snapshot every frame while running & visible

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..clock.periodic import PeriodicTask
from ..core.constants import DEFAULT_FRAME_RATE, TimerState
from ..core.engine import TimerEngine
from ..core.session import DisplaySnapshot
from ..core.verbose import vlog_warn

Surface = Callable[[DisplaySnapshot], None]


# * Render loop decoupled from clock ticks; reads the latest elapsed value on its own cadence
class RenderLoop:
    def __init__(
        self,
        engine: TimerEngine,
        surface: Surface,
        frame_rate: int = DEFAULT_FRAME_RATE,
        visible: bool = True,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {frame_rate}")
        self.engine = engine
        self.surface = surface
        self.frame_rate = frame_rate
        self._visible = visible
        self._lock = threading.Lock()
        self._frames: Optional[PeriodicTask] = None
        self.frames_rendered = 0
        self._unsubscribe = engine.subscribe(self._on_state_change)

        # reflect whatever the engine holds right now
        if engine.run_state is TimerState.RUNNING:
            self.start()
        elif visible:
            self.render_once()

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def active(self) -> bool:
        frames = self._frames
        return frames is not None and frames.active

    # * Begin per-frame rendering (no-op when hidden or already active)
    def start(self) -> None:
        with self._lock:
            if not self._visible or self._frames is not None:
                return
            self._frames = PeriodicTask(
                1.0 / self.frame_rate,
                self._frame,
                name="stopclock-render-loop",
                immediate=True,
                on_error=self._on_surface_error,
            ).start()

    # * Cancel the frame subscription; takes effect before returning
    def stop(self) -> None:
        with self._lock:
            frames = self._frames
            self._frames = None
        if frames is not None:
            frames.cancel()

    # * Render the current snapshot once, outside the frame cadence
    def render_once(self, snapshot: DisplaySnapshot | None = None) -> None:
        self.surface(snapshot or self.engine.snapshot())
        self.frames_rendered += 1

    # * Host surface visibility changed
    def set_visible(self, visible: bool) -> None:
        self._visible = visible
        if not visible:
            self.stop()
        elif self.engine.run_state is TimerState.RUNNING:
            self.start()
        else:
            self.render_once()

    def close(self) -> None:
        self.stop()
        self._unsubscribe()

    def _frame(self) -> None:
        self.render_once()

    # ! notifications can arrive out of order across clock & caller threads; the engine's
    # ! current state decides, the delivered snapshot is only the trigger
    def _on_state_change(self, _snapshot: DisplaySnapshot) -> None:
        if self.engine.run_state is TimerState.RUNNING:
            self.start()
            return
        self.stop()
        if self._visible:
            self.render_once()

    def _on_surface_error(self, error: Exception) -> None:
        vlog_warn(f"Display refresh failed, stopping render loop: {error}", "RENDER")
        self.stop()
