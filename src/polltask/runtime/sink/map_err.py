"""SinkMapErr: map the error type of a sink."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from polltask.foundation.core import Context, ForwardStream, Poll, Sink, Stream
from polltask.foundation.errors import Result

T = TypeVar("T")
F = TypeVar("F")


class SinkMapErr(Sink[T], Generic[T, F]):
    """Sink whose every reported error is passed through f.

    Successful results pass through untouched.
    """

    __slots__ = ("_sink", "_f")

    def __init__(self, sink: Sink[T], f: Callable[[object], F]) -> None:
        self._sink = sink
        self._f = f

    def poll_ready(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_ready(cx).map_err(self._f)

    def start_send(self, item: T) -> Result[None, F]:
        return self._sink.start_send(item).map_err(self._f)

    def poll_flush(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_flush(cx).map_err(self._f)

    def poll_close(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_close(cx).map_err(self._f)

    def get_ref(self) -> Sink[T]:
        return self._sink

    get_mut = get_ref

    def into_inner(self) -> Sink[T]:
        return self._sink


class SinkMapErrStream(SinkMapErr[T, F], ForwardStream[object]):
    """SinkMapErr over a sink that is also a stream; the stream side is untouched."""

    __slots__ = ()


def sink_map_err(sink: Sink[T], f: Callable[[object], F]) -> SinkMapErr[T, F]:
    """Wrap a sink, keeping its Stream side when it has one."""
    if isinstance(sink, Stream):
        return SinkMapErrStream(sink, f)
    return SinkMapErr(sink, f)
