"""
Throttle Module - Coalesce rapid tree updates for the caller.

At most one delivery per min_interval. An update arriving too soon
schedules a single trailing delivery so the latest state is never lost;
flush() delivers immediately and cancels anything pending.
"""

import threading
import time
from typing import Any, Callable, Optional

# Minimum seconds between tree deliveries
TREE_UPDATE_INTERVAL = 0.05


class ThrottledNotifier:
    """
    Rate-limited notifier.

    Attributes:
        callback: Receives the payload returned by snapshot()
        snapshot: Produces the payload at delivery time
        min_interval: Minimum seconds between deliveries
        deliveries: Number of payloads delivered so far
    """

    def __init__(
        self,
        callback: Callable[[Any], None],
        snapshot: Callable[[], Any],
        min_interval: float = TREE_UPDATE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.callback = callback
        self.snapshot = snapshot
        self.min_interval = min_interval
        self._clock = clock
        self._lock = threading.RLock()
        self._last_delivery: Optional[float] = None
        self._timer: Optional[threading.Timer] = None
        self.deliveries = 0

    @property
    def has_pending(self) -> bool:
        """True while a trailing delivery is scheduled."""
        with self._lock:
            return self._timer is not None

    def notify(self, force: bool = False) -> bool:
        """
        Request a delivery.

        Args:
            force: Deliver now regardless of the interval

        Returns:
            True if delivered immediately, False if coalesced
        """
        with self._lock:
            now = self._clock()
            elapsed = None if self._last_delivery is None else now - self._last_delivery

            if force or elapsed is None or elapsed >= self.min_interval:
                self._cancel_pending()
                self._deliver(now)
                return True

            if self._timer is None:
                self._timer = threading.Timer(self.min_interval - elapsed, self._fire_trailing)
                self._timer.daemon = True
                self._timer.start()
            return False

    def flush(self) -> None:
        """Force a final delivery."""
        self.notify(force=True)

    def _fire_trailing(self) -> None:
        with self._lock:
            if self._timer is None:
                return
            self._timer = None
            self._deliver(self._clock())

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _deliver(self, now: float) -> None:
        self._last_delivery = now
        self.deliveries += 1
        self.callback(self.snapshot())
