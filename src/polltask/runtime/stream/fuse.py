"""Fuse: remember exhaustion so a finished stream is never polled again."""

from __future__ import annotations

import logging
from typing import TypeVar

from polltask.foundation.core import Context, FusedStream, Poll, Ready, Stream

T = TypeVar("T")

logger = logging.getLogger("polltask.stream")


class Fuse(FusedStream[T]):
    """Stream that keeps returning Ready(None) once its inner stream did."""

    __slots__ = ("_stream", "_done")

    def __init__(self, stream: Stream[T]) -> None:
        self._stream = stream
        self._done = False

    def poll_next(self, cx: Context) -> Poll[T | None]:
        if self._done:
            return Ready(None)
        polled = self._stream.poll_next(cx)
        if polled.is_ready() and polled.unwrap() is None:
            logger.debug("Fuse: inner stream %r exhausted", type(self._stream).__name__)
            self._done = True
        return polled

    def is_terminated(self) -> bool:
        return self._done

    def get_ref(self) -> Stream[T]:
        return self._stream

    get_mut = get_ref

    def into_inner(self) -> Stream[T]:
        return self._stream


def fuse(stream: Stream[T]) -> Fuse[T]:
    return Fuse(stream)
