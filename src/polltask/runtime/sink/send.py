"""Send: future driving one item through a sink's ready/send/flush protocol."""

from __future__ import annotations

from typing import TypeVar

from polltask.foundation.core import Context, FusedFuture, Pending, Poll, Ready, Sink
from polltask.foundation.errors import ErrorCode, Result, debug_assert

T = TypeVar("T")

_SENT = object()


class Send(FusedFuture[Result[None, object]]):
    """Wait for capacity, hand the item over, then flush.

    Resolves with the first error reported by the sink, or Ok(None) once
    the item is flushed.
    """

    __slots__ = ("_sink", "_item", "_done")

    def __init__(self, sink: Sink[T], item: T) -> None:
        self._sink = sink
        self._item: T | object = item
        self._done = False

    def poll(self, cx: Context) -> Poll[Result[None, object]]:
        if not debug_assert(not self._done, ErrorCode.POLLED_AFTER_COMPLETION, "Send", "polled after completion"):
            return Pending()

        if self._item is not _SENT:
            ready = self._sink.poll_ready(cx)
            if ready.is_pending():
                return ready
            if ready.unwrap().is_err():
                self._done = True
                return ready
            item, self._item = self._item, _SENT
            sent = self._sink.start_send(item)  # type: ignore[arg-type]
            if sent.is_err():
                self._done = True
                return Ready(sent)

        flushed = self._sink.poll_flush(cx)
        if flushed.is_ready():
            self._done = True
        return flushed

    def is_terminated(self) -> bool:
        return self._done


def send(sink: Sink[T], item: T) -> Send:
    return Send(sink, item)
