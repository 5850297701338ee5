"""Collect: drain a stream into a container."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from typing import Callable, TypeVar

from polltask.foundation.core import Context, FusedFuture, Pending, Poll, Ready, Stream
from polltask.foundation.errors import ErrorCode, debug_assert

T = TypeVar("T")

logger = logging.getLogger("polltask.stream")


class Collect(FusedFuture[MutableSequence[T]]):
    """Future resolving with every item of the stream, in production order.

    Collect has no error channel of its own. For streams of Results use
    TryCollect, which short-circuits on the first error.

    Example:
        >>> block_on(Collect(from_iter([1, 2, 3])))
        [1, 2, 3]
    """

    __slots__ = ("_stream", "_items", "_done")

    def __init__(self, stream: Stream[T], factory: Callable[[], MutableSequence[T]] = list) -> None:
        self._stream = stream
        self._items: MutableSequence[T] = factory()
        self._done = False

    def poll(self, cx: Context) -> Poll[MutableSequence[T]]:
        if not debug_assert(not self._done, ErrorCode.POLLED_AFTER_COMPLETION, "Collect", "polled after completion"):
            return Pending()

        while True:
            polled = self._stream.poll_next(cx)
            if polled.is_pending():
                return Pending()
            item = polled.unwrap()
            if item is None:
                self._done = True
                logger.debug("Collect: resolved with %d items", len(self._items))
                return Ready(self._items)
            self._items.append(item)

    def is_terminated(self) -> bool:
        return self._done

    def get_ref(self) -> Stream[T]:
        return self._stream

    get_mut = get_ref

    def into_inner(self) -> Stream[T]:
        """Return the stream, discarding the items collected so far."""
        return self._stream


def collect(stream: Stream[T], factory: Callable[[], MutableSequence[T]] = list) -> Collect[T]:
    return Collect(stream, factory)
