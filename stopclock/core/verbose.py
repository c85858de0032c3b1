# stopclock/core/verbose.py
# Verbose logging utilities - delegates to unified OutputManager w/ structured logging for clock traffic, state transitions & config

from __future__ import annotations

from pathlib import Path
from typing import Any

from .output import OutputLevel, OutputSink, get_output_manager, set_output_manager


# * Build a terminal/file sink for the requested flags (not yet registered)
def build_output_manager(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
    quiet: bool = False,
) -> OutputSink:
    if enabled and dev_mode:
        requested_level = OutputLevel.DEBUG
    elif enabled:
        requested_level = OutputLevel.VERBOSE
    else:
        requested_level = OutputLevel.NORMAL

    # ! lazy import: core must not depend on cli at module load
    from ..cli.output_manager import OutputManager

    manager = OutputManager()
    manager.initialize(
        requested_level=requested_level,
        dev_mode=dev_mode,
        quiet=quiet,
        log_file=log_file,
    )
    return manager


# * Initialize verbose logging for a CLI invocation
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
    quiet: bool = False,
) -> None:
    set_output_manager(build_output_manager(enabled, log_file, dev_mode, quiet))


# * Check if verbose logging is enabled
def is_verbose_enabled() -> bool:
    return get_output_manager().is_verbose_enabled()


# * Core verbose logging function
def vlog(category: str, message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, category, detail)


# * Log clock source lifecycle & selection
def vlog_clock(message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, "CLOCK", detail)


# * Log a run state transition
def vlog_state(previous: str, current: str, elapsed_ms: int) -> None:
    get_output_manager().verbose(
        f"{previous} -> {current}", "STATE", f"elapsed={elapsed_ms}ms"
    )


# * Log configuration values being used
def vlog_config(key: str, value: Any) -> None:
    get_output_manager().verbose(f"{key} = {value}", "CONFIG")


# * Log a degraded-but-recoverable condition (always reaches the log file)
def vlog_warn(message: str, category: str = "WARN") -> None:
    get_output_manager().warn(message, category)


# * Cleanup verbose logging
def cleanup_verbose() -> None:
    get_output_manager().end_session()


# * Scoped logging session: installs its own sink & restores the previous one on exit
class VerboseSession:
    def __init__(
        self,
        enabled: bool = False,
        log_file: Path | None = None,
        dev_mode: bool = False,
    ):
        self.enabled = enabled
        self.log_file = log_file
        self.dev_mode = dev_mode
        self._previous: OutputSink | None = None

    def __enter__(self) -> "VerboseSession":
        manager = build_output_manager(self.enabled, self.log_file, self.dev_mode)
        self._previous = set_output_manager(manager)
        manager.start_session()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            get_output_manager().end_session()
        finally:
            if self._previous is not None:
                set_output_manager(self._previous)
                self._previous = None
