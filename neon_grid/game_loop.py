"""Fixed-interval timers driving the tick and the autosave."""
import logging
import threading
import time

logger = logging.getLogger(__name__)


class GameLoop:
    """Runs ``on_tick`` and ``on_save`` on independent fixed intervals.

    Each timer gets its own daemon thread. Both wait on one stop event, so
    ``stop()`` ends them together without waiting out a full interval.
    """

    def __init__(self, on_tick, on_save, tick_ms=1000, save_ms=30000):
        if tick_ms <= 0 or save_ms <= 0:
            raise ValueError("timer intervals must be positive")
        self._timers = [
            ('tick', on_tick, tick_ms / 1000),
            ('autosave', on_save, save_ms / 1000),
        ]
        self._stop_event = threading.Event()
        self._threads = []

    @property
    def running(self):
        return any(thread.is_alive() for thread in self._threads)

    def _run(self, name, callback, interval):
        next_run = time.monotonic() + interval
        while not self._stop_event.wait(max(next_run - time.monotonic(), 0)):
            try:
                callback()
            except Exception:
                logger.exception("Game loop %s callback failed", name)
            next_run += interval
            # Skip missed slots instead of firing a burst to catch up
            if next_run < time.monotonic():
                next_run = time.monotonic() + interval

    def start(self):
        """Start both timers. Calling it on a running loop does nothing."""
        if self.running:
            return
        self._stop_event.clear()
        self._threads = [
            threading.Thread(target=self._run, args=timer, name=f"neon-grid-{timer[0]}", daemon=True)
            for timer in self._timers
        ]
        for thread in self._threads:
            thread.start()
        logger.info("Game loop started")

    def stop(self, timeout=None):
        """Stop both timers and wait for their threads to exit."""
        self._stop_event.set()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout)
        self._threads = []
        logger.info("Game loop stopped")
