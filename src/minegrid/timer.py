"""
Elapsed-time accounting for a game session.

The elapsed value is accumulated from clock deltas, so a late or missed
tick never changes the reported time.
"""
import logging
import math
import threading
import time
from typing import Callable, Optional


logger = logging.getLogger(__name__)


# ============================================================================
# Timer Manager
# ============================================================================

class TimerManager:
    """
    Wall-clock accumulator with start/stop/reset semantics.

    When an ``on_tick`` callback is supplied, a daemon thread calls
    :meth:`tick` roughly every ``tick_interval`` seconds while the timer
    runs. The callback only receives the elapsed seconds for display.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        on_tick: Optional[Callable[[int], None]] = None,
        tick_interval: float = 1.0,
    ) -> None:
        """
        Initialize the timer.

        Args:
            clock: Source of the current time in seconds.
            on_tick: Optional display callback receiving elapsed seconds.
            tick_interval: Seconds between ticks of the display thread.
        """
        self._clock = clock
        self._on_tick = on_tick
        self._tick_interval = tick_interval
        self._accumulated = 0.0
        self._last_update = 0.0
        self._running = False
        self._stop_event = threading.Event()
        self._ticker: Optional[threading.Thread] = None

    # ========================================================================
    # Control
    # ========================================================================

    def start(self) -> None:
        """Begin accumulating from now. No-op while already running."""
        if self._running:
            return
        self._running = True
        self._last_update = self._clock()
        if self._on_tick is not None:
            self._start_ticker()

    def stop(self) -> None:
        """Flush the pending delta and halt. No-op when stopped."""
        if not self._running:
            return
        self._flush()
        self._running = False
        self._stop_ticker()

    def reset(self) -> None:
        """Stop and zero all state."""
        self.stop()
        self._accumulated = 0.0
        self._last_update = 0.0

    def tick(self) -> int:
        """
        Notify the display callback of the current elapsed time.

        Returns:
            Whole seconds elapsed.
        """
        seconds = self.elapsed()
        if self._on_tick is not None:
            self._on_tick(seconds)
        return seconds

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def is_running(self) -> bool:
        """Check if the timer is accumulating."""
        return self._running

    def elapsed_seconds(self) -> float:
        """Fractional seconds elapsed, including the running interval."""
        total = self._accumulated
        if self._running:
            total += self._clock() - self._last_update
        return total

    def elapsed(self) -> int:
        """Whole seconds elapsed while running."""
        return int(math.floor(self.elapsed_seconds()))

    # ========================================================================
    # Internals
    # ========================================================================

    def _flush(self) -> None:
        now = self._clock()
        self._accumulated += now - self._last_update
        self._last_update = now

    def _start_ticker(self) -> None:
        # One event per thread: a stopped thread stays stopped after restart
        self._stop_event = threading.Event()
        self._ticker = threading.Thread(
            target=self._tick_loop, args=(self._stop_event,), daemon=True
        )
        self._ticker.start()

    def _stop_ticker(self) -> None:
        self._stop_event.set()
        ticker = self._ticker
        self._ticker = None
        if ticker is not None and ticker is not threading.current_thread():
            ticker.join(timeout=self._tick_interval * 2)

    def _tick_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._tick_interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Timer tick callback failed")
                return
