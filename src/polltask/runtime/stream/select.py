"""Select: fan two streams of the same item type into one.

Priority alternates between the two sources. The source polled first on a
turn that produced an item loses priority for the next turn, so neither
source can starve the other while both are ready. This is plain 2-way
round-robin, not weighted fairness.

Example:
    >>> merged = from_iter(["a1", "a2"]).select(from_iter(["b1", "b2"]))
    >>> block_on(merged.collect())
    ['a1', 'b1', 'a2', 'b2']
"""

from __future__ import annotations

import logging
from typing import TypeVar

from polltask.foundation.core import Context, FusedStream, Pending, Poll, Ready, Stream

from .fuse import Fuse

T = TypeVar("T")

logger = logging.getLogger("polltask.stream")


class Select(FusedStream[T]):
    """Round-robin merge of two fused streams.

    Each source keeps its own order. The merged stream ends only when both
    sources are exhausted.
    """

    __slots__ = ("_stream1", "_stream2", "_flag")

    def __init__(self, stream1: Stream[T], stream2: Stream[T]) -> None:
        self._stream1: Fuse[T] = Fuse(stream1)
        self._stream2: Fuse[T] = Fuse(stream2)
        self._flag = False

    def poll_next(self, cx: Context) -> Poll[T | None]:
        if not self._flag:
            return self._poll_inner(self._stream1, self._stream2, cx)
        return self._poll_inner(self._stream2, self._stream1, cx)

    def _poll_inner(self, a: Fuse[T], b: Fuse[T], cx: Context) -> Poll[T | None]:
        first = a.poll_next(cx)
        a_done = False
        if first.is_ready():
            if first.unwrap() is not None:
                self._flag = not self._flag
                return first
            a_done = True

        second = b.poll_next(cx)
        if second.is_pending():
            return second
        if second.unwrap() is not None:
            return second
        if a_done:
            logger.debug("Select: both sources exhausted")
            return Ready(None)
        return Pending()

    def is_terminated(self) -> bool:
        return self._stream1.is_terminated() and self._stream2.is_terminated()

    def get_ref(self) -> tuple[Stream[T], Stream[T]]:
        return self._stream1.get_ref(), self._stream2.get_ref()

    get_mut = get_ref

    def into_inner(self) -> tuple[Stream[T], Stream[T]]:
        return self._stream1.into_inner(), self._stream2.into_inner()


def select(stream1: Stream[T], stream2: Stream[T]) -> Select[T]:
    return Select(stream1, stream2)
