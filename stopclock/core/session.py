# stopclock/core/session.py
# Timer session model & display snapshot (owned & mutated only by TimerEngine)

from __future__ import annotations

from dataclasses import dataclass

from .constants import TimerMode, TimerState
from .timecodec import TimeParts, format_time


# * Mutable session state; a single instance lives inside each TimerEngine
@dataclass
class TimerSession:
    mode: TimerMode = TimerMode.STOPWATCH
    run_state: TimerState = TimerState.IDLE
    elapsed_ms: int = 0
    # countdown duration; kept across mode switches until edited
    target_ms: int = 0
    # set once a countdown completion has fired; cleared on reset/start/mode change
    completed_flag: bool = False

    @property
    def remaining_ms(self) -> int:
        return max(0, self.target_ms - self.elapsed_ms)

    @property
    def is_running(self) -> bool:
        return self.run_state is TimerState.RUNNING

    # value the display should show for the current mode
    def display_ms(self) -> int:
        if self.mode is TimerMode.COUNTDOWN:
            return self.remaining_ms
        return self.elapsed_ms


# * Immutable read-only view handed to renderers & collaborators
@dataclass(frozen=True)
class DisplaySnapshot:
    mode: TimerMode
    remaining_or_elapsed_ms: int
    run_state: TimerState

    @property
    def parts(self) -> TimeParts:
        return format_time(self.remaining_or_elapsed_ms)

    @property
    def text(self) -> str:
        return str(self.parts)

    @classmethod
    def of(cls, session: TimerSession) -> "DisplaySnapshot":
        return cls(
            mode=session.mode,
            remaining_or_elapsed_ms=session.display_ms(),
            run_state=session.run_state,
        )
