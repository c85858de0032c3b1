# stopclock/clock/fallback.py
# In-process fallback clock: same contract as the isolated clock, acknowledged synchronously
#
# ! Lower accuracy than the isolated clock: ticks share the interpreter (& GIL) with the
# ! controller, so a busy controlling process delays them. Elapsed values stay exact because
# ! they are recomputed from the monotonic source on every report.

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from .base import ClockSource, ElapsedCounter
from .messages import (
    ClockCommand,
    ClockMessage,
    Start,
    Pause,
    Reset,
    QueryState,
    TickReport,
    Started,
    Paused,
    ResetAck,
    StateReport,
)
from .periodic import PeriodicTask
from ..core.constants import DEFAULT_TICK_RATE_MS


# * Clock running on the controlling process w/ a daemon ticker thread
class FallbackClock(ClockSource):
    name = "fallback"
    isolated = False

    def __init__(
        self,
        tick_rate_ms: int = DEFAULT_TICK_RATE_MS,
        now: Callable[[], float] = time.perf_counter,
        ticking: bool = True,
    ) -> None:
        super().__init__()
        self.tick_rate_ms = tick_rate_ms
        self._counter = ElapsedCounter(now)
        # handlers run while this lock is held so ticks & acks reach the engine in order
        self._lock = threading.RLock()
        self._ticking = ticking
        self._ticker: Optional[PeriodicTask] = None
        self._closed = False

    @property
    def running(self) -> bool:
        return self._counter.running

    # * Apply command & emit the acknowledgment before returning
    def send(self, command: ClockCommand) -> None:
        with self._lock:
            if self._closed:
                return
            reply = self._apply(command)
            if reply is not None:
                self._emit(reply)

    def _apply(self, command: ClockCommand) -> ClockMessage | None:
        if isinstance(command, Start):
            if not self._counter.start_from(command.from_ms):
                return None
            self._start_ticker()
            return Started(command.from_ms)

        if isinstance(command, Pause):
            if not self._counter.pause():
                return None
            self._stop_ticker()
            return Paused(self._counter.elapsed_ms())

        if isinstance(command, Reset):
            self._stop_ticker()
            self._counter.reset()
            return ResetAck()

        if isinstance(command, QueryState):
            return StateReport(self._counter.running, self._counter.elapsed_ms())

        return None

    def _start_ticker(self) -> None:
        if not self._ticking:
            return
        self._stop_ticker()
        self._ticker = PeriodicTask(
            self.tick_rate_ms / 1000.0, self._tick, name="stopclock-fallback-ticker"
        ).start()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    # periodic display-refresh notification
    def _tick(self) -> None:
        with self._lock:
            if self._closed or not self._counter.running:
                return
            self._emit(TickReport(self._counter.elapsed_ms()))

    def close(self) -> None:
        with self._lock:
            self._closed = True
            ticker = self._ticker
            self._stop_ticker()
        if ticker is not None:
            ticker.join(timeout=1.0)
