# stopclock/cli/output_manager.py
# Console & log-file sink behind the core output registry (quiet/normal/verbose/debug)

# * Registered via set_output_manager() from init_verbose() at CLI startup
# * Clock reader & ticker threads log through here too, so file writes are serialized
# * Layering: may import term_io; core modules only ever see the OutputSink protocol

from __future__ import annotations

import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

from ..core.output import OutputLevel


class OutputManager:
    def __init__(self) -> None:
        self._level = OutputLevel.NORMAL
        self._dev_mode = False
        self._started_at: float | None = None
        self._log_path: Path | None = None
        self._log: Optional[TextIO] = None
        self._log_lock = threading.Lock()

    # * Apply CLI flags: --quiet beats everything, DEBUG needs dev_mode
    def initialize(
        self,
        requested_level: OutputLevel = OutputLevel.NORMAL,
        dev_mode: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> None:
        self._dev_mode = dev_mode
        if quiet:
            self._level = OutputLevel.QUIET
        elif requested_level >= OutputLevel.DEBUG and not dev_mode:
            self._level = OutputLevel.VERBOSE
        else:
            self._level = requested_level
        self._started_at = time.monotonic()
        self._open_log(log_file)

    @property
    def level(self) -> OutputLevel:
        return self._level

    def is_debug_enabled(self) -> bool:
        return self._level >= OutputLevel.DEBUG

    def is_verbose_enabled(self) -> bool:
        return self._level >= OutputLevel.VERBOSE

    # per-message clock traffic; only w/ --verbose & dev_mode
    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None:
        if not self.is_debug_enabled():
            return
        self._console().print(f"[debug]\\[{category}][/] {msg}", **kwargs)
        self._record(category, msg)

    def verbose(
        self,
        msg: str,
        category: str = "INFO",
        detail: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if not self.is_verbose_enabled():
            return
        detail_lines = detail.split("\n") if detail else []

        console = self._console()
        console.print(
            f"[dim]{self._stamp()}[/] [stopclock.accent]\\[{category}][/] {msg}", **kwargs
        )
        for line in detail_lines:
            console.print(f"  [dim]{line}[/]")

        self._record(category, msg, detail_lines)

    # degraded-mode notices (clock fallback, render failures): on screen when verbose,
    # always in the log file
    def warn(self, msg: str, category: str = "WARN") -> None:
        if self.is_verbose_enabled():
            self._console().print(f"[warning]\\[{category}][/] {msg}")
        self._record(category, f"WARNING {msg}")

    def start_session(self) -> None:
        self._started_at = time.monotonic()
        banner = [f"Session Started: {datetime.now().isoformat()}", f"Level: {self._level.name}"]
        if self._dev_mode:
            banner.append("Mode: Developer (dev_mode enabled)")
        self._write_banner(banner)

    def end_session(self) -> None:
        self._write_banner([f"Session Ended: {datetime.now().isoformat()}"])
        self.cleanup()

    def cleanup(self) -> None:
        with self._log_lock:
            handle, self._log = self._log, None
        if handle is not None:
            try:
                handle.close()
            except OSError:
                pass

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    @staticmethod
    def _console() -> Any:
        from ..term_io.console import console

        return console

    # seconds since initialize(), e.g. "3.21s"
    def _stamp(self) -> str:
        if self._started_at is None:
            return "0.00s"
        return f"{time.monotonic() - self._started_at:.2f}s"

    def _open_log(self, log_file: Path | None) -> None:
        self.cleanup()
        self._log_path = log_file
        if log_file is None:
            return
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handle = open(log_file, "a", encoding="utf-8")
        except OSError:
            # logging to file is best-effort; console output is unaffected
            self._log_path = None
            return
        with self._log_lock:
            self._log = handle

    def _record(self, category: str, msg: str, detail_lines: list[str] | None = None) -> None:
        lines = [f"[{self._stamp()}] [{category}] {msg}"]
        lines += [f"  {line}" for line in detail_lines or []]
        self._write_lines(lines)

    def _write_banner(self, lines: list[str]) -> None:
        rule = "=" * 60
        self._write_lines(["", rule, *lines, rule, ""])

    def _write_lines(self, lines: list[str]) -> None:
        with self._log_lock:
            if self._log is None:
                return
            try:
                self._log.write("\n".join(lines) + "\n")
                self._log.flush()
            except (OSError, ValueError):
                pass
