# File: site_walker/crawler/frontier.py
"""
Bounded URL frontier with termination detection.

The frontier counts URLs handed out by :meth:`Frontier.get` until the worker
reports back with :meth:`Frontier.task_done`. The crawl is finished when the
queue is empty and nothing is in flight; an empty queue alone is not enough,
a worker may still be about to push new links.
"""
from __future__ import annotations

import asyncio
import enum
from collections import deque
from typing import Deque, Optional


class FrontierState(enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class FrontierClosed(Exception):
    """Raised by :meth:`Frontier.put` once the frontier no longer accepts URLs."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"frontier closed, cannot schedule {url}")


class Frontier:
    """Multi-producer/multi-consumer queue of pending URLs."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._queue: Deque[str] = deque()
        self._in_flight = 0
        self._done = False
        self._closed = False
        self._cond = asyncio.Condition()

    @property
    def state(self) -> FrontierState:
        if self._done:
            return FrontierState.DONE
        if not self._queue and self._in_flight:
            return FrontierState.DRAINING
        return FrontierState.RUNNING

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._queue)

    async def put(self, url: str) -> None:
        """
        Schedule ``url``, waiting while the queue is full.

        Raises FrontierClosed if the frontier is done or was closed.
        """
        async with self._cond:
            await self._cond.wait_for(
                lambda: self._closed or self._done or len(self._queue) < self.capacity
            )
            if self._closed or self._done:
                raise FrontierClosed(url)
            self._queue.append(url)
            self._cond.notify_all()

    async def get(self) -> Optional[str]:
        """
        Take the next URL and mark it in flight.

        Waits while the queue is empty but work is in flight. Returns None once
        the frontier is drained (state becomes DONE) or closed.
        """
        async with self._cond:
            await self._cond.wait_for(
                lambda: self._closed or bool(self._queue) or self._in_flight == 0
            )
            if self._closed:
                return None
            if not self._queue:
                self._done = True
                self._cond.notify_all()
                return None
            url = self._queue.popleft()
            self._in_flight += 1
            self._cond.notify_all()
            return url

    async def task_done(self) -> None:
        """Report that a URL returned by :meth:`get` has been fully processed."""
        async with self._cond:
            if self._in_flight <= 0:
                raise ValueError("task_done() called more times than get()")
            self._in_flight -= 1
            if not self._queue and self._in_flight == 0 and not self._closed:
                self._done = True
            self._cond.notify_all()

    async def close(self) -> None:
        """Stop handing out URLs. Pending and future puts raise FrontierClosed."""
        async with self._cond:
            self._closed = True
            self._cond.notify_all()
