# stopclock/core/output.py
# Verbosity levels & the process-wide output sink used by engine, clocks & render loop
# * Pure: the terminal/file implementation is stopclock/cli/output_manager.py
# * Clock reader & ticker threads call through get_output_manager(), never the CLI directly

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Protocol, runtime_checkable


class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


# * What core code may ask of an output sink (vlog_*, debug_* & VerboseSession)
@runtime_checkable
class OutputSink(Protocol):
    def is_debug_enabled(self) -> bool: ...

    def is_verbose_enabled(self) -> bool: ...

    # per-message clock traffic
    def debug(self, msg: str, category: str = "DEBUG") -> None: ...

    # lifecycle & state transitions
    def verbose(self, msg: str, category: str = "INFO", detail: Optional[str] = None) -> None: ...

    # degraded-mode notices (fallback clock, render failure)
    def warn(self, msg: str, category: str = "WARN") -> None: ...

    def start_session(self) -> None: ...

    def end_session(self) -> None: ...


# * Sink installed until the CLI registers a real one; drops everything
class NullOutputManager:
    def is_debug_enabled(self) -> bool:
        return False

    def is_verbose_enabled(self) -> bool:
        return False

    def debug(self, msg: str, category: str = "DEBUG") -> None:
        return None

    def verbose(self, msg: str, category: str = "INFO", detail: Optional[str] = None) -> None:
        return None

    def warn(self, msg: str, category: str = "WARN") -> None:
        return None

    def start_session(self) -> None:
        return None

    def end_session(self) -> None:
        return None


_NULL = NullOutputManager()
_sink: OutputSink = _NULL


def get_output_manager() -> OutputSink:
    return _sink


# * Install a sink; returns the one it replaced so callers can restore it
def set_output_manager(manager: OutputSink) -> OutputSink:
    global _sink
    previous, _sink = _sink, manager
    return previous


def reset_output_manager() -> None:
    set_output_manager(_NULL)
