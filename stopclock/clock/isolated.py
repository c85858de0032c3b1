# stopclock/clock/isolated.py
# Isolated clock: timing loop in a separate process, driven over primitive-dict queues
#
# * The child process owns its own monotonic source & tick cadence, so controller-side
#   contention (rendering, GIL-heavy collaborators) cannot skew elapsed time
# * A controller-side reader thread decodes replies & hands them to the bound handler
# * Commands are fire-and-forget; every result arrives later as a message

from __future__ import annotations

import multiprocessing
import queue
import sys
import threading
import time
from typing import Any, Optional

from .base import ClockSource, ElapsedCounter
from .messages import (
    ERROR_TYPE,
    ClockCommand,
    Start,
    Pause,
    Reset,
    QueryState,
    Ready,
    TickReport,
    Started,
    Paused,
    ResetAck,
    StateReport,
    decode_command,
    decode_message,
    encode_command,
    encode_message,
)
from ..core.constants import DEFAULT_TICK_RATE_MS
from ..core.debug import debug_message
from ..core.exceptions import ClockConstructionError, ClockFault
from ..core.verbose import vlog_clock, vlog_warn

# how often the reader wakes to check the child is still alive
_READER_POLL_S = 0.1


# * Timing loop executed inside the child process
class ClockWorker:
    def __init__(self, inbox: Any, outbox: Any, tick_rate_ms: int = DEFAULT_TICK_RATE_MS):
        self._inbox = inbox
        self._outbox = outbox
        self._interval_s = tick_rate_ms / 1000.0
        self._counter = ElapsedCounter(time.perf_counter)
        self._next_tick: float | None = None

    def _post(self, message) -> None:
        self._outbox.put(encode_message(message))

    # * Serve commands until the shutdown sentinel (None) arrives
    def run(self) -> None:
        self._post(Ready())

        while True:
            timeout = None
            if self._counter.running and self._next_tick is not None:
                timeout = max(0.0, self._next_tick - time.perf_counter())

            try:
                payload = self._inbox.get(timeout=timeout)
            except queue.Empty:
                self._tick()
                continue

            if payload is None:
                break

            command = decode_command(payload)
            if command is None:
                # the child has no output manager; stderr is its only log channel
                print(
                    f"stopclock clock worker: unknown message type {payload.get('type')!r}",
                    file=sys.stderr,
                )
                continue
            self.handle(command)

    def handle(self, command: ClockCommand) -> None:
        if isinstance(command, Start):
            if self._counter.start_from(command.from_ms):
                self._next_tick = time.perf_counter() + self._interval_s
                self._post(Started(command.from_ms))
        elif isinstance(command, Pause):
            if self._counter.pause():
                self._next_tick = None
                self._post(Paused(self._counter.elapsed_ms()))
        elif isinstance(command, Reset):
            # always stops; a running timer is not restarted from zero
            self._counter.reset()
            self._next_tick = None
            self._post(ResetAck())
        elif isinstance(command, QueryState):
            self._post(StateReport(self._counter.running, self._counter.elapsed_ms()))

    def _tick(self) -> None:
        if not self._counter.running:
            return
        self._post(TickReport(self._counter.elapsed_ms()))
        # drop missed ticks instead of bursting to catch up
        assert self._next_tick is not None
        self._next_tick = max(self._next_tick + self._interval_s, time.perf_counter())


# * Child process entry point; reports crashes as an error frame before exiting
def run_clock_worker(inbox: Any, outbox: Any, tick_rate_ms: int = DEFAULT_TICK_RATE_MS) -> None:
    try:
        ClockWorker(inbox, outbox, tick_rate_ms).run()
    except Exception as e:
        outbox.put({"type": ERROR_TYPE, "message": f"{type(e).__name__}: {e}"})
        raise


# * Clock source backed by a separate process
class IsolatedClock(ClockSource):
    name = "isolated"
    isolated = True

    def __init__(
        self,
        tick_rate_ms: int = DEFAULT_TICK_RATE_MS,
        start_method: str = "spawn",
    ) -> None:
        super().__init__()
        self.tick_rate_ms = tick_rate_ms
        self._closed = threading.Event()
        self._faulted = False

        try:
            ctx = multiprocessing.get_context(start_method)
            self._inbox = ctx.Queue()
            self._outbox = ctx.Queue()
            self._process = ctx.Process(
                target=run_clock_worker,
                args=(self._inbox, self._outbox, tick_rate_ms),
                name="stopclock-isolated-clock",
                daemon=True,
            )
            self._process.start()
        except (OSError, ValueError, RuntimeError, ImportError) as e:
            raise ClockConstructionError(f"Could not start isolated clock process: {e}") from e

        self._reader = threading.Thread(
            target=self._read_loop, name="stopclock-isolated-reader", daemon=True
        )
        self._reader.start()
        vlog_clock(
            f"Isolated clock process started (pid {self._process.pid})",
            f"tick_rate={tick_rate_ms}ms, start_method={start_method}",
        )

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid

    def is_alive(self) -> bool:
        return self._process.is_alive()

    # * Post command to the child (fire-and-forget)
    def send(self, command: ClockCommand) -> None:
        if self._closed.is_set() or self._faulted:
            return
        payload = encode_command(command)
        debug_message(f"{self.name} ->", payload)
        try:
            self._inbox.put(payload)
        except (OSError, ValueError) as e:
            self._report_fault(ClockFault(f"Isolated clock channel closed: {e}"))

    # * Reader thread: decode replies & detect a dead child
    def _read_loop(self) -> None:
        while not self._closed.is_set():
            try:
                payload = self._outbox.get(timeout=_READER_POLL_S)
            except queue.Empty:
                if not self._process.is_alive() and not self._closed.is_set():
                    self._report_fault(
                        ClockFault(
                            "Isolated clock process exited unexpectedly",
                            exitcode=self._process.exitcode,
                        )
                    )
                    return
                continue
            except (EOFError, OSError, ValueError) as e:
                if not self._closed.is_set():
                    self._report_fault(ClockFault(f"Isolated clock channel failed: {e}"))
                return

            if self._closed.is_set():
                return

            if payload.get("type") == ERROR_TYPE:
                self._report_fault(
                    ClockFault(f"Isolated clock raised: {payload.get('message')}")
                )
                return

            message = decode_message(payload)
            if message is None:
                debug_message(f"{self.name} <- (ignored)", payload)
                vlog_clock(f"Ignoring unknown clock message type {payload.get('type')!r}")
                continue

            try:
                self._emit(message)
            except Exception as e:
                # keep reading; one bad handler call must not stall the channel
                vlog_warn(f"Clock message handler failed: {type(e).__name__}: {e}")

    def _report_fault(self, fault: ClockFault) -> None:
        if self._faulted:
            return
        self._faulted = True
        vlog_warn(f"{fault}", "CLOCK")
        self._fault(fault)

    # * Stop the child & the reader; idempotent
    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()

        try:
            self._inbox.put(None)
        except (OSError, ValueError):
            pass

        self._process.join(timeout=1.0)
        if self._process.is_alive():
            self._process.terminate()
            self._process.join(timeout=1.0)

        if self._reader is not threading.current_thread():
            self._reader.join(timeout=1.0)

        for q in (self._inbox, self._outbox):
            q.close()
            q.cancel_join_thread()
        vlog_clock("Isolated clock process stopped")
