# stopclock/clock/base.py
# Clock source contract shared by the isolated & fallback clocks, plus the elapsed counter both use

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .messages import (
    ClockCommand,
    ClockMessage,
    Start,
    Pause,
    Reset,
    QueryState,
    encode_message,
)
from ..core.debug import debug_message
from ..core.exceptions import ClockFault

MessageHandler = Callable[[ClockMessage], None]
FaultHandler = Callable[[ClockFault], None]


# * Monotonic elapsed-time arithmetic: accumulated + (now - start_instant)
# elapsed is always recomputed from the monotonic source, never from tick counts
class ElapsedCounter:
    def __init__(self, now: Callable[[], float] = time.perf_counter) -> None:
        self._now = now
        self._running = False
        self._accumulated_ms = 0.0
        self._start_instant: float | None = None

    @property
    def running(self) -> bool:
        return self._running

    # begin advancing from ms; False when already running
    def start_from(self, ms: int) -> bool:
        if self._running:
            return False
        self._accumulated_ms = float(max(0, ms))
        self._start_instant = self._now()
        self._running = True
        return True

    # fold the running span into the accumulator; False when not running
    def pause(self) -> bool:
        if not self._running:
            return False
        assert self._start_instant is not None
        self._accumulated_ms += (self._now() - self._start_instant) * 1000.0
        self._start_instant = None
        self._running = False
        return True

    def reset(self) -> None:
        self._running = False
        self._accumulated_ms = 0.0
        self._start_instant = None

    def elapsed_ms(self) -> int:
        if self._running:
            assert self._start_instant is not None
            span = (self._now() - self._start_instant) * 1000.0
            return max(0, int(self._accumulated_ms + span))
        return max(0, int(self._accumulated_ms))


# * Abstract clock source; every result is reported through the bound message handler
# Public control calls build typed commands & route them through send()
class ClockSource(ABC):

    # * Subclasses set a short identifier used in logs & the CLI status line
    name: str = ""

    # * True when timing runs outside the controlling process
    isolated: bool = False

    def __init__(self) -> None:
        self._on_message: Optional[MessageHandler] = None
        self._on_fault: Optional[FaultHandler] = None

    # register the engine's handlers (replaces any previous binding)
    def bind(self, on_message: MessageHandler, on_fault: FaultHandler | None = None) -> None:
        self._on_message = on_message
        self._on_fault = on_fault

    def start_from(self, ms: int) -> None:
        self.send(Start(from_ms=max(0, int(ms))))

    def pause(self) -> None:
        self.send(Pause())

    def reset(self) -> None:
        self.send(Reset())

    def query_state(self) -> None:
        self.send(QueryState())

    # * Deliver a control command (subclasses must implement)
    @abstractmethod
    def send(self, command: ClockCommand) -> None:
        pass

    # release threads/processes; safe to call more than once
    def close(self) -> None:
        pass

    # hand a decoded message to the bound handler
    def _emit(self, message: ClockMessage) -> None:
        debug_message(f"{self.name} <-", encode_message(message))
        handler = self._on_message
        if handler is not None:
            handler(message)

    # report an unrecoverable runtime fault to the bound handler
    def _fault(self, fault: ClockFault) -> None:
        handler = self._on_fault
        if handler is not None:
            handler(fault)

    def __enter__(self) -> "ClockSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
