# stopclock/clock/periodic.py
# Cancellable fixed-cadence callback thread shared by the fallback ticker & the render loop

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from ..core.debug import debug_error


# * Runs callback every interval on a daemon thread until cancelled
# Never catches up: late callbacks reschedule from now instead of firing in a burst
class PeriodicTask:
    def __init__(
        self,
        interval_s: float,
        callback: Callable[[], None],
        name: str = "stopclock-periodic",
        immediate: bool = False,
        on_error: Optional[Callable[[Exception], None]] = None,
        now: Callable[[], float] = time.perf_counter,
    ) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval must be positive, got {interval_s}")
        self.interval_s = interval_s
        self._callback = callback
        self._immediate = immediate
        self._on_error = on_error
        self._now = now
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def active(self) -> bool:
        return self._thread.is_alive() and not self._cancelled.is_set()

    def start(self) -> "PeriodicTask":
        self._thread.start()
        return self

    # synchronous from the caller's perspective: no callback starts after this returns
    # (one already in progress on the task thread may still finish)
    def cancel(self) -> None:
        self._cancelled.set()

    # wait for the thread to exit; no-op when called from the task thread itself
    def join(self, timeout: float | None = None) -> None:
        if self._thread is not threading.current_thread() and self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        next_at = self._now() if self._immediate else self._now() + self.interval_s

        while not self._cancelled.is_set():
            delay = next_at - self._now()
            if delay > 0 and self._cancelled.wait(delay):
                break
            if self._cancelled.is_set():
                break

            try:
                self._callback()
            except Exception as e:
                if self._on_error is not None:
                    self._on_error(e)
                else:
                    debug_error(e, f"{self._thread.name} callback")

            next_at = max(next_at + self.interval_s, self._now())
