"""SinkErrInto: convert a sink's errors into another error type."""

from __future__ import annotations

from functools import partial
from typing import Generic, TypeVar

from polltask.foundation.core import Context, ForwardStream, Poll, Sink, Stream
from polltask.foundation.errors import Result, into_error

from .map_err import SinkMapErr, sink_map_err

T = TypeVar("T")
F = TypeVar("F")


class SinkErrInto(Sink[T], Generic[T, F]):
    """SinkMapErr specialised to into_error conversion.

    Example:
        >>> class SendFailed(Exception):
        ...     @classmethod
        ...     def from_error(cls, err):
        ...         return cls(f"send failed: {err}")
        >>> sink = ListSink().sink_err_into(SendFailed)
    """

    __slots__ = ("_sink", "_error_type")

    def __init__(self, sink: Sink[T], error_type: type[F]) -> None:
        self._error_type = error_type
        self._sink: SinkMapErr[T, F] = sink_map_err(sink, partial(into_error, target=error_type))

    def poll_ready(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_ready(cx)

    def start_send(self, item: T) -> Result[None, F]:
        return self._sink.start_send(item)

    def poll_flush(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_flush(cx)

    def poll_close(self, cx: Context) -> Poll[Result[None, F]]:
        return self._sink.poll_close(cx)

    @property
    def error_type(self) -> type[F]:
        return self._error_type

    def get_ref(self) -> Sink[T]:
        return self._sink.get_ref()

    get_mut = get_ref

    def into_inner(self) -> Sink[T]:
        return self._sink.into_inner()


class SinkErrIntoStream(SinkErrInto[T, F], ForwardStream[object]):
    """SinkErrInto over a sink that is also a stream; the stream side is untouched."""

    __slots__ = ()


def sink_err_into(sink: Sink[T], error_type: type[F]) -> SinkErrInto[T, F]:
    if isinstance(sink, Stream):
        return SinkErrIntoStream(sink, error_type)
    return SinkErrInto(sink, error_type)
