# stopclock/clock/factory.py
# Clock source selection: one attempt at the isolated clock, permanent fallback on failure

from __future__ import annotations

from typing import Type

from .base import ClockSource
from .fallback import FallbackClock
from ..core.constants import DEFAULT_TICK_RATE_MS
from ..core.exceptions import ClockConstructionError
from ..core.verbose import vlog_clock, vlog_warn


# lazy class lookup for the isolated clock (tests can monkeypatch this)
def _get_isolated_clock_class() -> Type[ClockSource]:
    from .isolated import IsolatedClock

    return IsolatedClock


# lazy class lookup for the fallback clock (tests can monkeypatch this)
def _get_fallback_clock_class() -> Type[ClockSource]:
    return FallbackClock


# * Build the fallback clock (also used by the engine after a runtime fault)
def create_fallback_clock(tick_rate_ms: int = DEFAULT_TICK_RATE_MS) -> ClockSource:
    return _get_fallback_clock_class()(tick_rate_ms=tick_rate_ms)


# * Select the active clock once at startup; never retried
def create_clock_source(
    prefer_isolated: bool = True, tick_rate_ms: int = DEFAULT_TICK_RATE_MS
) -> ClockSource:
    if prefer_isolated:
        try:
            clock = _get_isolated_clock_class()(tick_rate_ms=tick_rate_ms)
            vlog_clock("Using isolated clock")
            return clock
        except ClockConstructionError as e:
            vlog_warn(f"Isolated clock unavailable, using in-process timing: {e}", "CLOCK")

    vlog_clock("Using fallback clock (in-process, less accurate under load)")
    return create_fallback_clock(tick_rate_ms)
