"""Drivers bridging poll-based tasks to ordinary Python code.

Provides the outermost poll loop, which the adapters themselves never own:
    - block_on: Run a future to completion on the calling thread
    - block_on_stream: Iterate a stream from synchronous code
    - into_awaitable: Await a future from asyncio code
    - aiter_stream: Iterate a stream with ``async for``

Between polls the driver parks until the task's waker fires. Wakes may
arrive from any thread and may be spurious; the driver simply polls again.

Example:
    >>> block_on(from_iter([1, 2]).collect())
    [1, 2]

    >>> async def main():
    ...     return await into_awaitable(from_iter([1, 2]).collect())
    >>> asyncio.run(main())
    [1, 2]
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, TypeVar

from polltask.foundation.core import Context, Future, Stream, Waker

from .observability import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

T = TypeVar("T")

logger = get_logger("interop")


# ─────────────────────────────────────────────────────────────────────────────
# Thread-parking driver
# ─────────────────────────────────────────────────────────────────────────────


class _ThreadParker:
    """Waker target parking the driving thread between polls."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def unpark(self) -> None:
        self._event.set()

    def park(self, timeout: float | None = None) -> bool:
        woken = self._event.wait(timeout)
        self._event.clear()
        return woken

    def context(self) -> Context:
        return Context.from_waker(Waker(self.unpark))


def block_on(future: Future[T], *, timeout: float | None = None) -> T:
    """Poll future on the calling thread until it resolves.

    Args:
        future: Task to drive
        timeout: Max seconds to stay parked waiting for a single wake

    Raises:
        TimeoutError: If no wake arrived within timeout
    """
    parker = _ThreadParker()
    cx = parker.context()
    polls = 0
    while True:
        polls += 1
        polled = future.poll(cx)
        if polled.is_ready():
            logger.debug("block_on: %s resolved after %d polls", type(future).__name__, polls)
            return polled.unwrap()
        if not parker.park(timeout):
            raise TimeoutError(f"{type(future).__name__} was not woken within {timeout}s")


def block_on_stream(stream: Stream[T], *, timeout: float | None = None) -> Iterator[T]:
    """Yield the stream's items, parking the thread whenever it is pending."""
    parker = _ThreadParker()
    cx = parker.context()
    while True:
        polled = stream.poll_next(cx)
        if polled.is_pending():
            if not parker.park(timeout):
                raise TimeoutError(f"{type(stream).__name__} was not woken within {timeout}s")
            continue
        item = polled.unwrap()
        if item is None:
            return
        yield item


# ─────────────────────────────────────────────────────────────────────────────
# asyncio driver
# ─────────────────────────────────────────────────────────────────────────────


class _LoopWaker:
    """Waker target setting an asyncio.Event from any thread."""

    __slots__ = ("_loop", "_event")

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._event = asyncio.Event()

    def wake(self) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._event.set)

    async def wait(self) -> None:
        await self._event.wait()
        self._event.clear()

    def context(self) -> Context:
        return Context.from_waker(Waker(self.wake))


async def into_awaitable(future: Future[T]) -> T:
    """Drive a future from the running event loop.

    Cancelling the awaiting coroutine simply stops polling, which drops
    the task's progress like any other cancellation.
    """
    waker = _LoopWaker(asyncio.get_running_loop())
    cx = waker.context()
    while True:
        polled = future.poll(cx)
        if polled.is_ready():
            return polled.unwrap()
        await waker.wait()


async def aiter_stream(stream: Stream[T]) -> AsyncIterator[T]:
    """Iterate a stream from asyncio code."""
    waker = _LoopWaker(asyncio.get_running_loop())
    cx = waker.context()
    while True:
        polled = stream.poll_next(cx)
        if polled.is_pending():
            await waker.wait()
            continue
        item = polled.unwrap()
        if item is None:
            return
        yield item
