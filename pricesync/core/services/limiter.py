"""FIFO concurrency limiter for outbound catalog calls."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class ConcurrencyLimiter:
    """Admit at most ``capacity`` tasks at once, queuing the rest in arrival order.

    A finishing task hands its slot straight to the oldest waiter, so a caller
    that arrives while others are queued never overtakes them. Each caller of
    :meth:`run` receives its own task's result or exception.

    Examples:
        >>> limiter = ConcurrencyLimiter(2)
        >>> result = await limiter.run(lambda: client.put_price(item_id, body))
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._active = 0
        self._peak_active = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def active(self) -> int:
        """Number of tasks currently holding a slot."""
        return self._active

    @property
    def waiting(self) -> int:
        return sum(1 for waiter in self._waiters if not waiter.done())

    @property
    def peak_active(self) -> int:
        """Highest number of simultaneously admitted tasks seen so far."""
        return self._peak_active

    async def run(self, task: Callable[[], Awaitable[T]]) -> T:
        """Run ``task`` once a slot is available and return its result."""
        await self._acquire()
        try:
            return await task()
        finally:
            self._release()

    async def _acquire(self) -> None:
        if self._active < self._capacity and not self._waiters:
            self._active += 1
            self._peak_active = max(self._peak_active, self._active)
            return

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # slot was already handed over; pass it on
                self._release()
            elif waiter in self._waiters:
                self._waiters.remove(waiter)
            raise

    def _release(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return
        self._active -= 1
