"""Leaf consumer tasks: drain and ListSink."""

from __future__ import annotations

import logging
from typing import TypeVar

from polltask.foundation.core import Context, Pending, Poll, Ready, Sink, Waker
from polltask.foundation.errors import Err, Ok, Result

T = TypeVar("T")

logger = logging.getLogger("polltask.sink")


class SinkClosed(Exception):
    """Item offered to a sink after it was closed."""


class Drain(Sink[object]):
    """Sink that accepts and discards everything."""

    __slots__ = ("received",)

    def __init__(self) -> None:
        self.received = 0

    def poll_ready(self, cx: Context) -> Poll[Result[None, object]]:
        return Ready(Ok(None))

    def start_send(self, item: object) -> Result[None, object]:
        self.received += 1
        return Ok(None)

    def poll_flush(self, cx: Context) -> Poll[Result[None, object]]:
        return Ready(Ok(None))

    def poll_close(self, cx: Context) -> Poll[Result[None, object]]:
        return Ready(Ok(None))


class ListSink(Sink[T]):
    """Sink buffering items in a list, optionally bounded.

    With a capacity, poll_ready stays pending while the buffer is full and
    the registered waker fires once flushing or take() frees room. Flushed
    items accumulate in ``flushed``.

    poll_ready never frees room by itself. A full sink only becomes ready
    again after someone calls poll_flush, poll_close or take(), so a driver
    that loops on poll_ready alone waits forever. Send flushes after
    every item.

    Example:
        >>> sink = ListSink()
        >>> block_on(sink.send("a"))
        Ok(None)
        >>> sink.flushed
        ['a']
    """

    __slots__ = ("buffer", "flushed", "capacity", "closed", "_waker")

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.buffer: list[T] = []
        self.flushed: list[T] = []
        self.capacity = capacity
        self.closed = False
        self._waker: Waker | None = None

    def _is_full(self) -> bool:
        return self.capacity is not None and len(self.buffer) >= self.capacity

    def _wake(self) -> None:
        waker, self._waker = self._waker, None
        if waker is not None:
            waker.wake()

    def poll_ready(self, cx: Context) -> Poll[Result[None, object]]:
        if self.closed:
            return Ready(Err(SinkClosed("sink is closed")))
        if self._is_full():
            self._waker = cx.waker
            return Pending()
        return Ready(Ok(None))

    def start_send(self, item: T) -> Result[None, object]:
        if self.closed:
            return Err(SinkClosed("sink is closed"))
        self.buffer.append(item)
        return Ok(None)

    def poll_flush(self, cx: Context) -> Poll[Result[None, object]]:
        self.flushed.extend(self.take())
        return Ready(Ok(None))

    def poll_close(self, cx: Context) -> Poll[Result[None, object]]:
        self.flushed.extend(self.take())
        if not self.closed:
            logger.debug("ListSink: closed after %d items", len(self.flushed))
        self.closed = True
        return Ready(Ok(None))

    def take(self) -> list[T]:
        """Remove and return buffered items, waking a driver waiting for room."""
        items, self.buffer = self.buffer, []
        if items:
            self._wake()
        return items


def drain() -> Drain:
    return Drain()
