"""Keyed TTL throttle for cache refreshes."""

from __future__ import annotations

import threading
import time
from typing import Callable


class RefreshManager:
    """Runs a refresh action at most once per ``ttl`` seconds per key.

    A key whose action is still running is skipped, so concurrent callers
    share one refresh. ``force`` ignores freshness but not an in-flight run.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._last_run: dict[str, float] = {}
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    def run(self, key: str, ttl: float, action: Callable[[], None], *, force: bool = False) -> bool:
        """Return ``True`` when ``action`` ran."""

        with self._lock:
            if key in self._in_flight:
                return False
            last = self._last_run.get(key)
            if not force and last is not None and self._clock() - last < ttl:
                return False
            self._in_flight.add(key)

        try:
            action()
            with self._lock:
                self._last_run[key] = self._clock()
        finally:
            with self._lock:
                self._in_flight.discard(key)
        return True

    def is_fresh(self, key: str, ttl: float) -> bool:
        with self._lock:
            last = self._last_run.get(key)
            return last is not None and self._clock() - last < ttl

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._last_run.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._last_run if k.startswith(prefix)]:
                del self._last_run[key]
