"""Capability forwarding for adapters wrapping multi-role tasks.

An adapter that transforms one side of a task which is both a Stream and a
Sink keeps the other side available through pure delegation. The
constructors of such adapters pick the forwarding variant only when the
wrapped task actually has the other capability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .task import Sink, Stream

if TYPE_CHECKING:
    from polltask.foundation.errors import Result

    from .poll import Poll
    from .task import Context

T = TypeVar("T")


class ForwardSink(Sink[T]):
    """Sink side of the wrapped ``_stream``, forwarded verbatim."""

    __slots__ = ()

    _stream: Sink[T]

    def poll_ready(self, cx: Context) -> Poll[Result[None, object]]:
        return self._stream.poll_ready(cx)

    def start_send(self, item: T) -> Result[None, object]:
        return self._stream.start_send(item)

    def poll_flush(self, cx: Context) -> Poll[Result[None, object]]:
        return self._stream.poll_flush(cx)

    def poll_close(self, cx: Context) -> Poll[Result[None, object]]:
        return self._stream.poll_close(cx)


class ForwardStream(Stream[T]):
    """Stream side of the wrapped ``_sink``, forwarded verbatim."""

    __slots__ = ()

    _sink: Stream[T]

    def poll_next(self, cx: Context) -> Poll[T | None]:
        return self._sink.poll_next(cx)
