"""MapErr: map the error of every failing item of a fallible stream."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from polltask.foundation.core import Context, ForwardSink, FusedStream, Poll, Sink, Stream
from polltask.foundation.errors import Result

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


class MapErr(Stream[Result[T, F]], Generic[T, E, F]):
    """Stream yielding inner items with Err payloads passed through f.

    f runs lazily, once per erroring item that is actually produced. Ok
    items are passed through untouched.

    Example:
        >>> errors = from_iter([Ok(1), Err("boom")]).map_err(str.upper)
        >>> block_on(errors.collect())
        [Ok(1), Err('BOOM')]
    """

    __slots__ = ("_stream", "_f")

    def __init__(self, stream: Stream[Result[T, E]], f: Callable[[E], F]) -> None:
        self._stream = stream
        self._f = f

    def poll_next(self, cx: Context) -> Poll[Result[T, F] | None]:
        polled = self._stream.poll_next(cx)
        if polled.is_pending():
            return polled  # type: ignore[return-value]
        item = polled.unwrap()
        if item is None:
            return polled  # type: ignore[return-value]
        return polled.map(lambda result: result.map_err(self._f))  # type: ignore[union-attr]

    def is_terminated(self) -> bool:
        """Delegate to the inner stream, which must be fused."""
        if not isinstance(self._stream, FusedStream):
            raise TypeError(f"{type(self._stream).__name__} is not a fused stream")
        return self._stream.is_terminated()

    def get_ref(self) -> Stream[Result[T, E]]:
        return self._stream

    get_mut = get_ref

    def into_inner(self) -> Stream[Result[T, E]]:
        return self._stream


class MapErrSink(MapErr[T, E, F], ForwardSink[object]):
    """MapErr over a stream that is also a sink; the sink side is untouched."""

    __slots__ = ()


def map_err(stream: Stream[Result[T, E]], f: Callable[[E], F]) -> MapErr[T, E, F]:
    """Wrap a fallible stream, keeping its Sink side when it has one."""
    if isinstance(stream, Sink):
        return MapErrSink(stream, f)
    return MapErr(stream, f)
