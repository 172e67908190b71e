# scheduling/recurring_task.py
"""
Recurring refresh bound to the lifetime of whatever starts it.

    with RecurringTask("market", 300, load_market_snapshot) as task:
        ...            # task.latest holds the most recent result

Scheduling is clock driven (``run_pending``) so tests can advance a fake
clock instead of sleeping; ``start`` only adds a thread that calls it.
"""

import threading
import time

from loguru import logger


class RecurringTask:

    def __init__(self, name, period, action, clock=time.monotonic):
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.name = name
        self.period = period
        self.action = action
        self.clock = clock

        self._lock = threading.Lock()
        self._run_lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread = None
        self._latest = None
        self._next_run = None
        self.runs = 0

    @property
    def latest(self):
        with self._lock:
            return self._latest

    @property
    def cancelled(self):
        return self._stopped.is_set()

    def is_due(self):
        return self._next_run is None or self.clock() >= self._next_run

    def seconds_until_due(self):
        if self._next_run is None:
            return 0.0
        return max(0.0, self._next_run - self.clock())

    def run_pending(self):
        """Run the action if its period has elapsed. Returns True if it ran."""
        return self._run(force=False)

    def trigger(self):
        """Run now and restart the period from here."""
        self._run(force=True)
        return self.latest

    def _run(self, force):
        with self._run_lock:
            # a trigger may have run while we waited for the lock
            if self.cancelled or not (force or self.is_due()):
                return False
            self._next_run = self.clock() + self.period
            try:
                result = self.action()
            except Exception:
                logger.exception(f"{self.name} refresh failed; keeping previous result")
                return True
            with self._lock:
                self._latest = result
                self.runs += 1
        logger.debug(f"{self.name} refreshed (run {self.runs})")
        return True

    def _loop(self):
        while not self._stopped.is_set():
            self.run_pending()
            self._stopped.wait(self.seconds_until_due())

    def start(self):
        if self._thread is not None:
            return self
        self._stopped.clear()
        self._thread = threading.Thread(target=self._loop, name=f"{self.name}-poller", daemon=True)
        self._thread.start()
        logger.info(f"Started {self.name} poller (every {self.period:g}s)")
        return self

    def cancel(self, timeout=5.0):
        self._stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info(f"Cancelled {self.name} poller")

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False
