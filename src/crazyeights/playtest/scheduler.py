"""Delayed opponent turns."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TurnScheduler:
    """Holds at most one pending delayed callback.

    Scheduling replaces any pending callback. Each schedule gets a new
    generation number; a timer whose generation is no longer current when
    it fires does nothing, which covers timers that were already running
    when they got cancelled.

    Thread-safety: schedule(), cancel() and the timer thread share a
    threading.Lock. Callbacks run outside the lock.
    """

    def __init__(
        self,
        delay: float,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        """Initialize the scheduler.

        Args:
            delay: Seconds to wait before running a scheduled callback.
            timer_factory: Builds the timer; takes (interval, function, args).
        """
        self.delay = delay
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._closed = False
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a scheduled callback has not finished running."""
        with self._lock:
            return self._timer is not None and self._timer.is_alive()

    def schedule(self, callback: Callable[[], None]) -> int:
        """Run ``callback`` after the delay, replacing any pending one.

        Returns:
            The generation number of the new timer.

        Raises:
            RuntimeError: If the scheduler has been closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("TurnScheduler is closed")
            self._cancel_locked()
            self._generation += 1
            token = self._generation
            timer = self._timer_factory(self.delay, self._fire, args=(token, callback))
            timer.daemon = True
            self._timer = timer
            timer.start()
        logger.debug(f"Scheduled callback generation {token} in {self.delay}s")
        return token

    def _fire(self, token: int, callback: Callable[[], None]) -> None:
        with self._lock:
            if token != self._generation:
                logger.debug(f"Dropping stale callback generation {token}")
                return
        callback()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the pending callback has run.

        Returns:
            False if nothing was pending.
        """
        with self._lock:
            timer = self._timer
        if timer is None or not timer.is_alive():
            return False
        timer.join(timeout)
        return True

    def close(self) -> None:
        """Cancel the pending callback and refuse new ones."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._closed = True
