"""Per-key minimum-interval rate limiting with an injectable clock."""

import time
from typing import Callable, Hashable


class RateLimiter:
    def __init__(self, min_interval_s: float, clock: Callable[[], float] = time.monotonic):
        self.min_interval_s = min_interval_s
        self.clock = clock
        self._last_access: dict[Hashable, float] = {}

    def try_acquire(self, key: Hashable = None) -> bool:
        """Record an access for ``key`` and return True if the interval has elapsed."""
        now = self.clock()
        last = self._last_access.get(key)
        if last is not None and now - last < self.min_interval_s:
            return False
        self._last_access[key] = now
        return True

    def reset(self) -> None:
        self._last_access.clear()
