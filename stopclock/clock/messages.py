# stopclock/clock/messages.py
# Typed clock protocol messages & their primitive-dict wire encoding
#
# * Only ints, bools & strings cross the channel; the clock & controller never share objects
# * Controller -> clock: start / pause / reset / queryState
# * Clock -> controller: ready / tick / started / paused / reset / state (+ transport-level error)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


# * Clock -> controller variants


@dataclass(frozen=True)
class Ready:
    pass


# non-authoritative refresh notification
@dataclass(frozen=True)
class TickReport:
    elapsed_ms: int


@dataclass(frozen=True)
class Started:
    elapsed_ms: int


@dataclass(frozen=True)
class Paused:
    elapsed_ms: int


@dataclass(frozen=True)
class ResetAck:
    elapsed_ms: int = 0


@dataclass(frozen=True)
class StateReport:
    running: bool
    elapsed_ms: int


ClockMessage = Union[Ready, TickReport, Started, Paused, ResetAck, StateReport]


# * Controller -> clock variants


@dataclass(frozen=True)
class Start:
    from_ms: int


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class QueryState:
    pass


ClockCommand = Union[Start, Pause, Reset, QueryState]


# transport-level fault frame emitted by a crashing worker
ERROR_TYPE = "error"


def _elapsed(value: Any) -> int:
    # clamp to a non-negative integer millisecond count
    return max(0, int(value))


# * Encode controller command as wire dict
def encode_command(command: ClockCommand) -> dict[str, Any]:
    if isinstance(command, Start):
        return {"type": "start", "fromMs": _elapsed(command.from_ms)}
    if isinstance(command, Pause):
        return {"type": "pause"}
    if isinstance(command, Reset):
        return {"type": "reset"}
    if isinstance(command, QueryState):
        return {"type": "queryState"}
    raise TypeError(f"Not a clock command: {command!r}")


# * Decode wire dict into a controller command; None for unknown types
def decode_command(payload: Mapping[str, Any]) -> ClockCommand | None:
    kind = payload.get("type")
    if kind == "start":
        return Start(from_ms=_elapsed(payload.get("fromMs", 0)))
    if kind == "pause":
        return Pause()
    if kind == "reset":
        return Reset()
    if kind == "queryState":
        return QueryState()
    return None


# * Encode clock message as wire dict
def encode_message(message: ClockMessage) -> dict[str, Any]:
    if isinstance(message, Ready):
        return {"type": "ready"}
    if isinstance(message, TickReport):
        return {"type": "tick", "elapsed": _elapsed(message.elapsed_ms)}
    if isinstance(message, Started):
        return {"type": "started", "elapsed": _elapsed(message.elapsed_ms)}
    if isinstance(message, Paused):
        return {"type": "paused", "elapsed": _elapsed(message.elapsed_ms)}
    if isinstance(message, ResetAck):
        return {"type": "reset", "elapsed": 0}
    if isinstance(message, StateReport):
        return {
            "type": "state",
            "running": bool(message.running),
            "elapsed": _elapsed(message.elapsed_ms),
        }
    raise TypeError(f"Not a clock message: {message!r}")


# * Decode wire dict into a clock message; None for unknown types
def decode_message(payload: Mapping[str, Any]) -> ClockMessage | None:
    kind = payload.get("type")
    if kind == "ready":
        return Ready()
    if kind == "tick":
        return TickReport(_elapsed(payload.get("elapsed", 0)))
    if kind == "started":
        return Started(_elapsed(payload.get("elapsed", 0)))
    if kind == "paused":
        return Paused(_elapsed(payload.get("elapsed", 0)))
    if kind == "reset":
        return ResetAck()
    if kind == "state":
        return StateReport(
            running=bool(payload.get("running", False)),
            elapsed_ms=_elapsed(payload.get("elapsed", 0)),
        )
    return None
