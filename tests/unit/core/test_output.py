# tests/unit/core/test_output.py
# Unit tests for core output module (pure layer) & the verbose/debug helpers

from stopclock.core.output import (
    OutputLevel,
    OutputSink,
    NullOutputManager,
    get_output_manager,
    set_output_manager,
    reset_output_manager,
)
from stopclock.core import debug, verbose


class RecordingManager(NullOutputManager):
    def __init__(self, level=OutputLevel.DEBUG):
        self.level = level
        self.records = []

    def is_debug_enabled(self):
        return self.level >= OutputLevel.DEBUG

    def is_verbose_enabled(self):
        return self.level >= OutputLevel.VERBOSE

    def debug(self, msg, category="DEBUG"):
        self.records.append(("debug", category, msg))

    def verbose(self, msg, category="INFO", detail=None):
        self.records.append(("verbose", category, msg))

    def warn(self, msg, category="WARN"):
        self.records.append(("warn", category, msg))


class TestOutputLevel:

    # * Verify levels are ordered correctly
    def test_level_ordering(self):
        assert OutputLevel.QUIET < OutputLevel.NORMAL < OutputLevel.VERBOSE < OutputLevel.DEBUG


class TestRegistry:

    # * Verify default registry holds a no-op manager
    def test_default_is_null(self):
        manager = get_output_manager()
        assert isinstance(manager, NullOutputManager)
        assert isinstance(manager, OutputSink)
        assert manager.is_verbose_enabled() is False

    # * Verify set & reset round trip
    def test_set_and_reset(self):
        custom = RecordingManager()
        set_output_manager(custom)
        assert get_output_manager() is custom

        reset_output_manager()
        assert isinstance(get_output_manager(), NullOutputManager)

    # * Verify set_output_manager hands back the sink it replaced
    def test_set_returns_previous(self):
        first = RecordingManager()
        second = RecordingManager()
        set_output_manager(first)
        assert set_output_manager(second) is first


class TestHelpers:

    # * Verify verbose helpers route categories
    def test_vlog_categories(self):
        manager = RecordingManager()
        set_output_manager(manager)

        verbose.vlog_clock("Using fallback clock")
        verbose.vlog_state("idle", "running", 0)
        verbose.vlog_config("mode", "countdown")
        verbose.vlog_warn("isolated clock failed", "CLOCK")

        assert manager.records == [
            ("verbose", "CLOCK", "Using fallback clock"),
            ("verbose", "STATE", "idle -> running"),
            ("verbose", "CONFIG", "mode = countdown"),
            ("warn", "CLOCK", "isolated clock failed"),
        ]

    # * Verify wire messages are traced w/o the type key repeated
    def test_debug_message(self):
        manager = RecordingManager()
        set_output_manager(manager)

        debug.debug_message("isolated ->", {"type": "start", "fromMs": 1500})
        debug.debug_message("isolated <-", {"type": "ready"})

        assert manager.records == [
            ("debug", "MSG", "isolated -> start (fromMs=1500)"),
            ("debug", "MSG", "isolated <- ready"),
        ]

    # * Verify debug_error formats exception w/ context
    def test_debug_error(self):
        manager = RecordingManager()
        set_output_manager(manager)

        debug.debug_error(ValueError("bad"), "ticker")
        assert manager.records == [("debug", "ERROR", "ticker - Exception: ValueError: bad")]
        assert debug.is_debug_enabled() is True
