"""
Unit tests for TimerManager.
"""
import threading

import pytest

from minegrid import TimerManager


# ============================================================================
# Start/Stop Tests
# ============================================================================

class TestTimerControl:
    """Test start, stop and reset semantics."""

    def test_new_timer_is_idle(self, timer: TimerManager) -> None:
        assert timer.is_running is False
        assert timer.elapsed() == 0

    def test_elapsed_follows_clock(self, clock, timer: TimerManager) -> None:
        timer.start()
        clock.advance(12.7)
        assert timer.elapsed() == 12
        assert timer.elapsed_seconds() == pytest.approx(12.7)

    def test_stop_freezes_elapsed(self, clock, timer: TimerManager) -> None:
        timer.start()
        clock.advance(5)
        timer.stop()
        clock.advance(100)
        assert timer.elapsed() == 5
        assert timer.is_running is False

    def test_start_twice_is_noop(self, clock, timer: TimerManager) -> None:
        timer.start()
        clock.advance(3)
        timer.start()
        clock.advance(2)
        assert timer.elapsed() == 5

    def test_start_resumes_after_stop(self, clock, timer: TimerManager) -> None:
        timer.start()
        clock.advance(4)
        timer.stop()
        clock.advance(50)
        timer.start()
        clock.advance(6)
        assert timer.elapsed() == 10

    def test_reset_zeroes_and_stops(self, clock, timer: TimerManager) -> None:
        timer.start()
        clock.advance(30)
        timer.reset()
        clock.advance(30)
        assert timer.elapsed() == 0
        assert timer.is_running is False

    def test_stop_when_idle_is_noop(self, timer: TimerManager) -> None:
        timer.stop()
        assert timer.elapsed() == 0


# ============================================================================
# Tick Tests
# ============================================================================

class TestTimerTick:
    """Test tick reporting."""

    def test_tick_reports_elapsed(self, clock) -> None:
        seen = []
        timer = TimerManager(clock=clock, on_tick=seen.append, tick_interval=60)
        timer.start()
        clock.advance(7)
        assert timer.tick() == 7
        assert seen == [7]
        timer.stop()

    def test_late_tick_does_not_change_elapsed(self, clock, timer: TimerManager) -> None:
        """Elapsed time comes from the clock, not from counting ticks."""
        timer.start()
        clock.advance(9.5)
        assert timer.elapsed() == 9
        assert timer.tick() == 9

    def test_ticker_thread_calls_back(self) -> None:
        fired = threading.Event()
        timer = TimerManager(on_tick=lambda seconds: fired.set(), tick_interval=0.01)
        timer.start()
        try:
            assert fired.wait(timeout=2.0)
        finally:
            timer.stop()
        assert timer.is_running is False

    def test_restart_after_slow_tick_leaves_one_ticker(self) -> None:
        """A ticker still inside its callback at stop() exits once it returns."""
        entered = threading.Event()
        gate = threading.Event()

        def slow_tick(seconds: int) -> None:
            entered.set()
            gate.wait(timeout=2.0)

        timer = TimerManager(on_tick=slow_tick, tick_interval=0.01)
        timer.start()
        assert entered.wait(timeout=2.0)
        old = timer._ticker
        timer.stop()
        timer.start()
        try:
            assert timer._ticker is not old
            gate.set()
            old.join(timeout=2.0)
            assert not old.is_alive()
        finally:
            timer.stop()
