# tests/unit/clock/test_isolated_clock.py
# Unit tests for the isolated clock worker loop & the process-backed clock source

import queue
import time

import pytest

from stopclock.clock import isolated
from stopclock.clock.isolated import ClockWorker, IsolatedClock, run_clock_worker
from stopclock.clock.messages import (
    Ready,
    TickReport,
    Started,
    Paused,
    ResetAck,
    StateReport,
    Start,
    Pause,
    Reset,
    QueryState,
)
from stopclock.core.exceptions import ClockConstructionError, ClockFault


def drain(q):
    items = []
    while True:
        try:
            items.append(q.get_nowait())
        except queue.Empty:
            return items


class TestClockWorker:

    # * Verify command handling mirrors the clock contract
    def test_handle_commands(self):
        inbox, outbox = queue.Queue(), queue.Queue()
        worker = ClockWorker(inbox, outbox)

        worker.handle(Start(from_ms=2000))
        worker.handle(Start(from_ms=0))
        worker.handle(Pause())
        worker.handle(Pause())
        worker.handle(Reset())
        worker.handle(QueryState())

        types = [m["type"] for m in drain(outbox)]
        assert types == ["started", "paused", "reset", "state"]

    # * Verify run loop posts ready, skips unknown types & stops on sentinel
    def test_run_loop(self, capsys):
        inbox, outbox = queue.Queue(), queue.Queue()
        for payload in ({"type": "rewind"}, {"type": "queryState"}, None):
            inbox.put(payload)

        ClockWorker(inbox, outbox).run()

        assert drain(outbox) == [
            {"type": "ready"},
            {"type": "state", "running": False, "elapsed": 0},
        ]
        assert "unknown message type 'rewind'" in capsys.readouterr().err

    # * Verify a crashing worker posts an error frame & re-raises
    def test_crash_posts_error_frame(self, monkeypatch):
        def explode(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(ClockWorker, "run", explode)
        outbox = queue.Queue()

        with pytest.raises(RuntimeError):
            run_clock_worker(queue.Queue(), outbox)

        assert drain(outbox) == [{"type": "error", "message": "RuntimeError: boom"}]


class TestIsolatedClockConstruction:

    # * Verify unusable start methods raise ClockConstructionError
    def test_bad_start_method(self):
        with pytest.raises(ClockConstructionError):
            IsolatedClock(start_method="no-such-method")

    # * Verify process start failures are wrapped
    def test_process_start_failure(self, monkeypatch):
        class BrokenContext:
            def Queue(self):
                return queue.Queue()

            def Process(self, **kwargs):
                raise OSError("fork limit reached")

        monkeypatch.setattr(isolated.multiprocessing, "get_context", lambda method: BrokenContext())
        with pytest.raises(ClockConstructionError, match="fork limit"):
            IsolatedClock()


class TestIsolatedClockProcess:

    @pytest.fixture
    def clock_and_messages(self):
        messages = queue.Queue()
        faults = queue.Queue()
        clock = IsolatedClock(tick_rate_ms=10)
        clock.bind(messages.put, faults.put)
        yield clock, messages, faults
        clock.close()

    @staticmethod
    def wait_for_message(messages, kind, timeout=10.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                message = messages.get(timeout=0.1)
            except queue.Empty:
                continue
            if isinstance(message, kind):
                return message
        raise AssertionError(f"no {kind.__name__} within {timeout}s")

    # * Verify full command round trip through the child process
    def test_round_trip(self, clock_and_messages):
        clock, messages, faults = clock_and_messages

        self.wait_for_message(messages, Ready)
        assert clock.is_alive()

        clock.start_from(1000)
        assert self.wait_for_message(messages, Started) == Started(1000)
        tick = self.wait_for_message(messages, TickReport)
        assert tick.elapsed_ms >= 1000

        clock.pause()
        paused = self.wait_for_message(messages, Paused)
        assert paused.elapsed_ms >= tick.elapsed_ms

        clock.query_state()
        report = self.wait_for_message(messages, StateReport)
        assert report == StateReport(False, paused.elapsed_ms)

        clock.reset()
        self.wait_for_message(messages, ResetAck)
        assert faults.empty()

    # * Verify a killed child is reported as a fault
    def test_dead_child_faults(self, clock_and_messages):
        clock, messages, faults = clock_and_messages
        self.wait_for_message(messages, Ready)

        clock._process.terminate()

        fault = faults.get(timeout=5.0)
        assert isinstance(fault, ClockFault)
        # later commands are dropped rather than raising
        clock.start_from(0)

    # * Verify close stops the child & is idempotent
    def test_close(self, clock_and_messages):
        clock, messages, faults = clock_and_messages
        self.wait_for_message(messages, Ready)

        clock.close()
        clock.close()
        assert not clock.is_alive()
        assert faults.empty()
