# tests/unit/cli/test_output_manager.py
# Unit tests for OutputManager implementation

from unittest.mock import patch

from stopclock.core.output import OutputLevel, OutputSink
from stopclock.core.verbose import init_verbose, VerboseSession
from stopclock.core.output import get_output_manager
from stopclock.cli.output_manager import OutputManager


class TestInitialize:

    # * Verify OutputManager implements protocol w/ NORMAL default
    def test_defaults(self):
        manager = OutputManager()
        assert isinstance(manager, OutputSink)
        manager.initialize()
        assert manager.level == OutputLevel.NORMAL
        assert manager.is_verbose_enabled() is False

    # * Verify DEBUG requires dev_mode
    def test_debug_requires_dev_mode(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=False)
        assert manager.level == OutputLevel.VERBOSE

        manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=True)
        assert manager.is_debug_enabled() is True

    # * Verify --quiet overrides everything
    def test_quiet_overrides_everything(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=True, quiet=True)
        assert manager.level == OutputLevel.QUIET


class TestOutputMethods:

    # * Verify debug only at DEBUG level
    def test_debug_only_at_debug_level(self):
        manager = OutputManager()

        with patch("stopclock.term_io.console.console") as mock_console:
            manager.initialize(requested_level=OutputLevel.NORMAL)
            manager.debug("clock <- tick")
            mock_console.print.assert_not_called()

            manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=True)
            manager.debug("clock <- tick")
            mock_console.print.assert_called_once()

    # * Verify verbose w/ detail prints one line per detail line
    def test_verbose_with_detail(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.VERBOSE)

        with patch("stopclock.term_io.console.console") as mock_console:
            manager.verbose("Isolated clock process started", "CLOCK", "pid 1\ntick_rate=16ms")
            assert mock_console.print.call_count == 3

    # * Verify warnings are hidden at NORMAL but always logged to file
    def test_warn_logged_to_file(self, tmp_path):
        log_file = tmp_path / "stopclock.log"
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.NORMAL, log_file=log_file)

        with patch("stopclock.term_io.console.console") as mock_console:
            manager.warn("Isolated clock failed; switching to fallback", "CLOCK")
            mock_console.print.assert_not_called()
        manager.cleanup()

        content = log_file.read_text()
        assert "[CLOCK] WARNING Isolated clock failed" in content

    # * Verify warnings are shown when verbose
    def test_warn_shown_when_verbose(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.VERBOSE)

        with patch("stopclock.term_io.console.console") as mock_console:
            manager.warn("render loop stopped", "RENDER")
            mock_console.print.assert_called_once()


class TestFileLogging:

    # * Verify session start/end markers
    def test_session_logging(self, tmp_path):
        log_file = tmp_path / "session.log"
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.VERBOSE, log_file=log_file)
        manager.start_session()
        manager.verbose("mid-session", "STATE")
        manager.end_session()

        content = log_file.read_text()
        assert "Session Started" in content
        assert "[STATE] mid-session" in content
        assert "Session Ended" in content


class TestVerboseInit:

    # * Verify init_verbose registers a manager at the requested level
    def test_init_verbose_registers(self):
        init_verbose(enabled=True)
        assert get_output_manager().level == OutputLevel.VERBOSE

        init_verbose(enabled=True, dev_mode=True)
        assert get_output_manager().is_debug_enabled() is True

    # * Verify VerboseSession writes session markers to its log file
    def test_verbose_session(self, tmp_path):
        log_file = tmp_path / "verbose.log"
        with VerboseSession(enabled=True, log_file=log_file):
            get_output_manager().verbose("inside", "CONFIG")
        assert "inside" in log_file.read_text()

    # * Verify VerboseSession puts back whichever sink was active before it
    def test_verbose_session_restores_previous(self, tmp_path):
        init_verbose(enabled=False)
        outer = get_output_manager()
        with VerboseSession(enabled=True, log_file=tmp_path / "inner.log"):
            assert get_output_manager() is not outer
            assert get_output_manager().is_verbose_enabled() is True
        assert get_output_manager() is outer
