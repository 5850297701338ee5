"""SelectNextSome: a future for the next item of a borrowed fused stream."""

from __future__ import annotations

from typing import TypeVar

from polltask.foundation.core import Context, FusedFuture, FusedStream, Pending, Poll
from polltask.foundation.errors import ErrorCode, debug_assert

T = TypeVar("T")


class SelectNextSome(FusedFuture[T]):
    """Resolves with the next item of the stream, never with exhaustion.

    Meant as one arm of a larger selection loop. When the stream turns out
    to be exhausted the future wakes its own driver and stays pending, and
    is_terminated() reports True so the loop can drop the arm. The stream
    is borrowed, not owned.
    """

    __slots__ = ("_stream",)

    def __init__(self, stream: FusedStream[T]) -> None:
        if not isinstance(stream, FusedStream):
            raise TypeError(f"{type(stream).__name__} is not a fused stream, wrap it with fuse() first")
        self._stream = stream

    def poll(self, cx: Context) -> Poll[T]:
        if not debug_assert(
            not self._stream.is_terminated(),
            ErrorCode.POLLED_AFTER_TERMINATION,
            "SelectNextSome",
            "polled after the stream terminated",
        ):
            return Pending()

        polled = self._stream.poll_next(cx)
        if polled.is_pending() or polled.unwrap() is not None:
            return polled  # type: ignore[return-value]
        cx.waker.wake()
        return Pending()

    def is_terminated(self) -> bool:
        return self._stream.is_terminated()


def select_next_some(stream: FusedStream[T]) -> SelectNextSome[T]:
    return SelectNextSome(stream)
