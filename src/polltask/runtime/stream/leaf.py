"""Leaf sequence tasks: from_iter, empty, once and stream_poll_fn."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from polltask.foundation.core import Context, FusedStream, Poll, Ready, Stream

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")

_EXHAUSTED = object()


class IterStream(FusedStream[T]):
    """Stream over a synchronous iterable; every poll is immediately ready."""

    __slots__ = ("_iter", "_done")

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iter = iter(iterable)
        self._done = False

    def poll_next(self, cx: Context) -> Poll[T | None]:
        if self._done:
            return Ready(None)
        item = next(self._iter, _EXHAUSTED)
        if item is _EXHAUSTED:
            self._done = True
            return Ready(None)
        if item is None:
            raise TypeError("stream items cannot be None, Ready(None) means exhaustion")
        return Ready(item)

    def is_terminated(self) -> bool:
        return self._done


class StreamPollFn(Stream[T]):
    """Stream whose poll_next delegates to a plain function of the context."""

    __slots__ = ("_f",)

    def __init__(self, f: Callable[[Context], Poll[T | None]]) -> None:
        self._f = f

    def poll_next(self, cx: Context) -> Poll[T | None]:
        return self._f(cx)


def from_iter(iterable: Iterable[T]) -> IterStream[T]:
    """Convert an iterable into an always-ready stream.

    Polling raises TypeError when the iterable produces None, since
    Ready(None) is reserved for exhaustion.
    """
    return IterStream(iterable)


def empty() -> IterStream[object]:
    return IterStream(())


def once(value: T) -> IterStream[T]:
    return IterStream((value,))


def stream_poll_fn(f: Callable[[Context], Poll[T | None]]) -> StreamPollFn[T]:
    return StreamPollFn(f)
