# stopclock/core/engine.py
# Timer state machine: owns the session, drives the active clock source & reacts to its messages
#
# * Transitions triggered by the clock happen only when its acknowledgment arrives
# * reset() is the exception: the session shows Idle/zero immediately & stale messages are
#   discarded until the matching reset acknowledgment
# * Completion is evaluated on every authoritative elapsed update, independent of rendering
# ! Clock calls, listeners & completion callbacks always run outside the engine lock;
# ! the fallback clock delivers acks synchronously & holds its own lock while doing so

from __future__ import annotations

import functools
import threading
from typing import Callable, Optional, TYPE_CHECKING

from .constants import (
    DEFAULT_COUNTDOWN_MS,
    DEFAULT_TICK_RATE_MS,
    MAX_EDITABLE_MS,
    TimerMode,
    TimerState,
)
from .exceptions import ClockFault, TimeEditError, TimerStateError
from .session import DisplaySnapshot, TimerSession
from .timecodec import ms_to_string, parse_time_strict
from .verbose import vlog_clock, vlog_state, vlog_warn

if TYPE_CHECKING:
    from ..clock.base import ClockSource
    from ..clock.messages import ClockMessage

StateListener = Callable[[DisplaySnapshot], None]
CompletionCallback = Callable[[DisplaySnapshot], None]
Followup = Callable[[], None]


# default replacement clock after a runtime fault (lazy import keeps core free of clock imports)
def _default_fallback_factory(tick_rate_ms: int = DEFAULT_TICK_RATE_MS) -> "ClockSource":
    from ..clock.factory import create_fallback_clock

    return create_fallback_clock(tick_rate_ms)


# * Dual-mode timer state machine over a single active clock source
class TimerEngine:
    def __init__(
        self,
        clock: "ClockSource",
        mode: TimerMode = TimerMode.STOPWATCH,
        target_ms: int = 0,
        fallback_factory: Optional[Callable[[], "ClockSource"]] = None,
        tick_rate_ms: int = DEFAULT_TICK_RATE_MS,
    ) -> None:
        self._lock = threading.RLock()
        # signalled on every session change; see wait_for()
        self._changed = threading.Condition(self._lock)
        self.session = TimerSession(mode=mode, target_ms=max(0, int(target_ms)))
        if mode is TimerMode.COUNTDOWN and self.session.target_ms == 0:
            self.session.target_ms = DEFAULT_COUNTDOWN_MS

        self._fallback_factory = fallback_factory or functools.partial(
            _default_fallback_factory, tick_rate_ms
        )
        self._listeners: list[StateListener] = []
        self._completion_callbacks: list[CompletionCallback] = []

        # resets sent but not yet acknowledged; messages before the ack are stale
        self._pending_resets = 0
        # start sent but not yet acknowledged (replayed if the clock faults meanwhile)
        self._start_requested = False
        # pause sent but not yet acknowledged (a fault meanwhile must not resume)
        self._pause_requested = False
        self._clock_ready = False

        self._clock = clock
        self._clock.bind(self._handle_message, self._handle_fault)

    # ------------------------------------------------------------------
    # read-only views
    # ------------------------------------------------------------------

    @property
    def clock(self) -> "ClockSource":
        return self._clock

    @property
    def clock_ready(self) -> bool:
        return self._clock_ready

    @property
    def mode(self) -> TimerMode:
        return self.session.mode

    @property
    def run_state(self) -> TimerState:
        return self.session.run_state

    @property
    def elapsed_ms(self) -> int:
        return self.session.elapsed_ms

    @property
    def target_ms(self) -> int:
        return self.session.target_ms

    @property
    def completed_flag(self) -> bool:
        return self.session.completed_flag

    # no control command is still awaiting its acknowledgment
    @property
    def settled(self) -> bool:
        return self._pending_resets == 0 and not (self._start_requested or self._pause_requested)

    # * Block until predicate(session) holds or timeout elapses; returns the final result
    def wait_for(
        self, predicate: Callable[[TimerSession], bool], timeout: float | None = None
    ) -> bool:
        with self._changed:
            return self._changed.wait_for(lambda: predicate(self.session), timeout)

    def snapshot(self) -> DisplaySnapshot:
        with self._lock:
            return DisplaySnapshot.of(self.session)

    # alias matching the collaborator-facing name
    get_display_snapshot = snapshot

    # ------------------------------------------------------------------
    # subscriptions
    # ------------------------------------------------------------------

    # * Subscribe to run state & mode changes; returns an unsubscribe callable
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # * Subscribe to countdown completion; fired at most once per completion event
    def on_completion(self, callback: CompletionCallback) -> Callable[[], None]:
        with self._lock:
            self._completion_callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._completion_callbacks:
                    self._completion_callbacks.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # control operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self.session.is_running:
                return
            self.session.completed_flag = False
            self._start_requested = True
            from_ms = self.session.elapsed_ms
            clock = self._clock
        clock.start_from(from_ms)

    def pause(self) -> None:
        with self._lock:
            if not self.session.is_running:
                return
            self._pause_requested = True
            clock = self._clock
        clock.pause()

    def toggle(self) -> None:
        if self.run_state is TimerState.RUNNING:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        with self._lock:
            self._pending_resets += 1
            self._start_requested = False
            self._pause_requested = False
            self.session.elapsed_ms = 0
            self.session.completed_flag = False
            followups = self._transition(TimerState.IDLE, force_notify=True)
            clock = self._clock
        self._run(followups)
        clock.reset()

    def set_mode(self, mode: TimerMode) -> None:
        followups: list[Followup] = []
        with self._lock:
            if self.session.mode is mode:
                return

            was_running = self.session.is_running
            if was_running:
                # subscribers observe Paused before the switch completes
                followups += self._transition(TimerState.PAUSED)

            self._pending_resets += 1
            self._start_requested = False
            self._pause_requested = False
            self.session.mode = mode
            self.session.elapsed_ms = 0
            self.session.completed_flag = False
            if mode is TimerMode.COUNTDOWN and self.session.target_ms == 0:
                self.session.target_ms = DEFAULT_COUNTDOWN_MS
            followups += self._transition(TimerState.IDLE, force_notify=True)
            clock = self._clock

        self._run(followups)
        if was_running:
            clock.pause()
        clock.reset()

    def toggle_mode(self) -> None:
        if self.mode is TimerMode.STOPWATCH:
            self.set_mode(TimerMode.COUNTDOWN)
        else:
            self.set_mode(TimerMode.STOPWATCH)

    # * Overwrite stopwatch elapsed time (not while running)
    def edit_elapsed(self, ms: int) -> None:
        with self._lock:
            self._check_editable(TimerMode.STOPWATCH, ms)
            self.session.elapsed_ms = int(ms)
            followups = self._transition(self.session.run_state, force_notify=True)
        self._run(followups)

    # * Overwrite countdown target (not while running); also zeroes elapsed
    def edit_target(self, ms: int) -> None:
        with self._lock:
            self._check_editable(TimerMode.COUNTDOWN, ms)
            self.session.target_ms = int(ms)
            self.session.elapsed_ms = 0
            self.session.completed_flag = False
            followups = self._transition(TimerState.IDLE, force_notify=True)
        self._run(followups)

    # * Parse hh:mm:ss.cc & apply it to the field the current mode edits
    def edit_time(self, text: str) -> int:
        ms = parse_time_strict(text)
        if self.mode is TimerMode.COUNTDOWN:
            self.edit_target(ms)
        else:
            self.edit_elapsed(ms)
        return ms

    # * Ask the clock for a state report (reconciled when it arrives)
    def query_state(self) -> None:
        with self._lock:
            clock = self._clock
        clock.query_state()

    def close(self) -> None:
        with self._lock:
            clock = self._clock
        clock.close()

    # ------------------------------------------------------------------
    # clock events
    # ------------------------------------------------------------------

    def _handle_message(self, message: "ClockMessage") -> None:
        from ..clock.messages import (
            Ready,
            TickReport,
            Started,
            Paused,
            ResetAck,
            StateReport,
        )

        with self._lock:
            if isinstance(message, ResetAck):
                if self._pending_resets > 0:
                    self._pending_resets -= 1
                    self._changed.notify_all()
                return

            if isinstance(message, Ready):
                self._clock_ready = True
                vlog_clock(f"{self._clock.name.capitalize()} clock ready")
                self._changed.notify_all()
                return

            if self._pending_resets > 0:
                # superseded by a reset that has not been acknowledged yet
                return

            if isinstance(message, TickReport):
                followups = self._on_elapsed(message.elapsed_ms)
            elif isinstance(message, Started):
                followups = self._on_started(message.elapsed_ms)
            elif isinstance(message, Paused):
                followups = self._on_paused(message.elapsed_ms)
            elif isinstance(message, StateReport):
                followups = self._on_state_report(message.running, message.elapsed_ms)
            else:
                vlog_clock(f"Ignoring unexpected clock message {message!r}")
                return
            self._changed.notify_all()

        self._run(followups)

    def _on_started(self, elapsed_ms: int) -> list[Followup]:
        self._start_requested = False
        self.session.elapsed_ms = elapsed_ms
        followups = self._transition(TimerState.RUNNING)
        return followups + self._check_completion()

    def _on_paused(self, elapsed_ms: int) -> list[Followup]:
        self._start_requested = False
        self._pause_requested = False
        self.session.elapsed_ms = elapsed_ms
        if self.session.run_state is TimerState.COMPLETED:
            # completion already paused the session; only the frozen value changes
            return []
        return self._transition(TimerState.PAUSED, force_notify=True)

    # tick: non-authoritative refresh, but still the latest elapsed reading
    def _on_elapsed(self, elapsed_ms: int) -> list[Followup]:
        if not self.session.is_running:
            return []
        if elapsed_ms > self.session.elapsed_ms:
            self.session.elapsed_ms = elapsed_ms
            self._changed.notify_all()
        return self._check_completion()

    def _on_state_report(self, running: bool, elapsed_ms: int) -> list[Followup]:
        if self.session.is_running and running:
            return self._on_elapsed(elapsed_ms)
        if self.session.is_running and not running:
            # clock stopped without us asking; freeze at its value
            return self._on_paused(elapsed_ms)
        return []

    # * Completion: countdown reached zero while running; fires once
    def _check_completion(self) -> list[Followup]:
        session = self.session
        if (
            session.mode is not TimerMode.COUNTDOWN
            or not session.is_running
            or session.completed_flag
            or session.target_ms - session.elapsed_ms > 0
        ):
            return []

        session.completed_flag = True
        followups = self._transition(TimerState.COMPLETED)
        snapshot = DisplaySnapshot.of(session)
        clock = self._clock
        callbacks = list(self._completion_callbacks)

        followups.append(clock.pause)
        for callback in callbacks:
            followups.append(lambda cb=callback: cb(snapshot))
        return followups

    # ------------------------------------------------------------------
    # runtime fault -> fallback clock
    # ------------------------------------------------------------------

    def _handle_fault(self, fault: ClockFault) -> None:
        followups: list[Followup] = []
        with self._lock:
            failed = self._clock
            vlog_warn(
                f"{failed.name.capitalize()} clock failed ({fault}); switching to fallback clock",
                "CLOCK",
            )

            resume = (
                self.session.is_running or self._start_requested
            ) and not self._pause_requested
            if self.session.is_running:
                # never left Running w/o a live clock: freeze at the last known value
                followups += self._transition(TimerState.PAUSED)

            # acks from the failed clock will never arrive
            self._pending_resets = 0
            self._start_requested = False
            self._pause_requested = False

            replacement = self._fallback_factory()
            replacement.bind(self._handle_message, self._handle_fault)
            self._clock = replacement
            self._clock_ready = True

        followups.append(failed.close)
        self._run(followups)
        if resume:
            # replay the last known elapsed value into the replacement clock
            self.start()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _check_editable(self, mode: TimerMode, ms: int) -> None:
        session = self.session
        if session.is_running:
            raise TimerStateError("Pause the timer before editing its time", "running")
        if session.mode is not mode:
            raise TimerStateError(
                f"Cannot edit the {mode.value} value in {session.mode.value} mode",
                session.run_state.value,
            )
        if isinstance(ms, bool) or not isinstance(ms, int):
            raise TimeEditError(f"Time must be an integer millisecond count, got {ms!r}", ms)
        if not 0 <= ms <= MAX_EDITABLE_MS:
            raise TimeEditError(
                f"Time must be between 00:00:00.00 and {ms_to_string(MAX_EDITABLE_MS)}",
                ms,
            )

    # apply a run state change under the lock; returns listener notifications to run after
    def _transition(self, new_state: TimerState, force_notify: bool = False) -> list[Followup]:
        self._changed.notify_all()
        previous = self.session.run_state
        if previous is new_state and not force_notify:
            return []
        self.session.run_state = new_state
        if previous is not new_state:
            vlog_state(previous.value, new_state.value, self.session.elapsed_ms)

        snapshot = DisplaySnapshot.of(self.session)
        return [lambda listener=listener: listener(snapshot) for listener in self._listeners]

    @staticmethod
    def _run(followups: list[Followup]) -> None:
        for followup in followups:
            followup()
