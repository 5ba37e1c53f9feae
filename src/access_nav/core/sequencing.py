"""Ordering helpers for overlapping async requests."""

import asyncio
from typing import Awaitable, Callable, Hashable, Optional, TypeVar

T = TypeVar("T")


class RouteRequestTracker:
    """Monotonic request generations; only the latest issued one is current."""

    def __init__(self):
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, generation: int) -> bool:
        return generation == self._latest


class Debouncer:
    """Delay calls per key; a newer call for the same key supersedes pending ones.

    Superseded calls resolve to ``None`` without running their factory.
    """

    def __init__(self, delay_s: float):
        self.delay_s = delay_s
        self._pending: dict[Hashable, asyncio.Task] = {}

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> Optional[T]:
        previous = self._pending.get(key)
        if previous is not None and not previous.done():
            previous.cancel()

        timer = asyncio.ensure_future(asyncio.sleep(self.delay_s))
        self._pending[key] = timer
        try:
            await timer
        except asyncio.CancelledError:
            if timer.cancelled() and self._pending.get(key) is not timer:
                return None
            raise
        # A newer call may have arrived after this timer finished but before we resumed
        if self._pending.get(key) is not timer:
            return None
        del self._pending[key]
        return await factory()
