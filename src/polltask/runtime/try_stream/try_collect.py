"""TryCollect: drain a fallible stream, short-circuiting on the first error."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from typing import Callable, Generic, TypeVar

from polltask.foundation.core import Context, FusedFuture, Pending, Poll, Ready, Stream
from polltask.foundation.errors import Err, ErrorCode, Ok, Result, debug_assert

T = TypeVar("T")
E = TypeVar("E")

logger = logging.getLogger("polltask.stream")


class TryCollect(FusedFuture[Result[MutableSequence[T], E]], Generic[T, E]):
    """Future resolving with Ok(all items) or the first Err.

    The container is created lazily on the first Ok item. On the first Err
    the partially filled container is discarded and the stream is not
    polled again, so items behind the error are never observed. Callers
    rely on partial results never leaking out.

    Example:
        >>> block_on(from_iter([Ok(1), Err("e"), Ok(3)]).try_collect())
        Err('e')
    """

    __slots__ = ("_stream", "_factory", "_items", "_done")

    def __init__(self, stream: Stream[Result[T, E]], factory: Callable[[], MutableSequence[T]] = list) -> None:
        self._stream = stream
        self._factory = factory
        self._items: MutableSequence[T] | None = None
        self._done = False

    def poll(self, cx: Context) -> Poll[Result[MutableSequence[T], E]]:
        if not debug_assert(not self._done, ErrorCode.POLLED_AFTER_COMPLETION, "TryCollect", "polled after completion"):
            return Pending()

        while True:
            polled = self._stream.poll_next(cx)
            if polled.is_pending():
                return Pending()
            item = polled.unwrap()
            if item is None:
                self._done = True
                items, self._items = self._items, None
                return Ready(Ok(items if items is not None else self._factory()))
            if item.is_err():
                self._done = True
                discarded = len(self._items) if self._items is not None else 0
                self._items = None
                logger.debug("TryCollect: short-circuit on error, %d items discarded", discarded)
                return Ready(Err(item.unwrap_err()))
            if self._items is None:
                self._items = self._factory()
            self._items.append(item.unwrap())

    def is_terminated(self) -> bool:
        return self._done

    def get_ref(self) -> Stream[Result[T, E]]:
        return self._stream

    get_mut = get_ref

    def into_inner(self) -> Stream[Result[T, E]]:
        """Return the stream, discarding the items collected so far."""
        return self._stream


def try_collect(stream: Stream[Result[T, E]], factory: Callable[[], MutableSequence[T]] = list) -> TryCollect[T, E]:
    return TryCollect(stream, factory)
