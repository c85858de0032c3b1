# stopclock/clock/__init__.py
# Clock sources: isolated-process clock, in-process fallback & the shared message protocol

from .base import ClockSource, MessageHandler, FaultHandler
from .messages import (
    ClockMessage,
    Ready,
    TickReport,
    Started,
    Paused,
    ResetAck,
    StateReport,
    ClockCommand,
    Start,
    Pause,
    Reset,
    QueryState,
)
from .factory import create_clock_source

__all__ = [
    "ClockSource",
    "MessageHandler",
    "FaultHandler",
    "ClockMessage",
    "Ready",
    "TickReport",
    "Started",
    "Paused",
    "ResetAck",
    "StateReport",
    "ClockCommand",
    "Start",
    "Pause",
    "Reset",
    "QueryState",
    "create_clock_source",
]
