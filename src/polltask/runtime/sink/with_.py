"""With: run every item through an async conversion before sending it on.

The adapter holds at most one item in flight. Its progress is a tagged
union:

    Empty -> Processing(future) -> Buffered(item) -> Empty

start_send is only valid in Empty, and poll_ready reports ready exactly
when the adapter drove itself back to Empty. That is the backpressure
contract: callers wait for poll_ready before every start_send.

Example:
    >>> target = ListSink()
    >>> sink = target.with_(lambda raw: ready(Ok(raw * 10)))
    >>> block_on(sink.send(1))
    Ok(None)
    >>> target.flushed
    [10]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from polltask.foundation.core import Context, ForwardStream, Future, Pending, Poll, Ready, Sink, Stream, into_future
from polltask.foundation.errors import Err, ErrorCode, Ok, ProtocolError, Result, debug_assert, into_error

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger("polltask.sink")


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class Processing(Generic[T]):
    future: Future[Result[T, object]]


@dataclass(frozen=True, slots=True)
class Buffered(Generic[T]):
    item: T


WithState = Empty | Processing | Buffered


class With(Sink[U], Generic[U, T]):
    """Sink accepting raw items U, converting them to T for the inner sink.

    f(raw) returns anything into_future accepts whose output is a
    Result[T, E]: usually a Future, or a Result for a synchronous
    conversion. Errors of the inner sink are converted with
    into_error(error, error_type).

    Dropping the adapter, or calling into_inner, discards an item that is
    still Processing or Buffered.
    """

    __slots__ = ("_sink", "_f", "_error_type", "_state")

    def __init__(self, sink: Sink[T], f: Callable[[U], object], error_type: type | None = None) -> None:
        self._sink = sink
        self._f = f
        self._error_type = error_type
        self._state: WithState = Empty()

    @property
    def state(self) -> WithState:
        return self._state

    def _drive(self, cx: Context) -> Poll[Result[None, object]]:
        """Push the in-flight item as far as possible towards the inner sink."""
        match self._state:
            case Empty():
                return Ready(Ok(None))
            case Processing(future):
                polled = future.poll(cx)
                if polled.is_pending():
                    return Pending()
                converted = polled.unwrap()
                if converted.is_err():
                    self._state = Empty()
                    logger.debug("With: conversion failed, item dropped")
                    return Ready(Err(converted.unwrap_err()))
                self._state = Buffered(converted.unwrap())
                logger.debug("With: Processing -> Buffered")

        ready = self._sink.poll_ready(cx)
        if ready.is_pending():
            return Pending()
        if ready.unwrap().is_err():
            return Ready(Err(self._convert(ready.unwrap().unwrap_err())))

        item = self._state.item  # type: ignore[union-attr]
        self._state = Empty()
        logger.debug("With: Buffered -> Empty")
        return Ready(self._sink.start_send(item).map_err(self._convert))

    def _convert(self, error: object) -> object:
        return into_error(error, self._error_type)

    def poll_ready(self, cx: Context) -> Poll[Result[None, object]]:
        return self._drive(cx)

    def start_send(self, item: U) -> Result[None, object]:
        message = f"start_send while {type(self._state).__name__}, poll_ready must report ready first"
        if not debug_assert(isinstance(self._state, Empty), ErrorCode.NOT_READY_FOR_SEND, "With", message):
            # the in-flight item is kept, the new one is refused
            return Err(ProtocolError(adapter="With", message=message, code=ErrorCode.NOT_READY_FOR_SEND))
        self._state = Processing(into_future(self._f(item)))
        logger.debug("With: Empty -> Processing")
        return Ok(None)

    def poll_flush(self, cx: Context) -> Poll[Result[None, object]]:
        drained = self._drive(cx)
        if drained.is_pending() or drained.unwrap().is_err():
            return drained
        return self._sink.poll_flush(cx).map_err(self._convert)

    def poll_close(self, cx: Context) -> Poll[Result[None, object]]:
        drained = self._drive(cx)
        if drained.is_pending() or drained.unwrap().is_err():
            return drained
        return self._sink.poll_close(cx).map_err(self._convert)

    def get_ref(self) -> Sink[T]:
        return self._sink

    get_mut = get_ref

    def into_inner(self) -> Sink[T]:
        """Return the inner sink, discarding any item still in flight."""
        self._state = Empty()
        return self._sink


class WithStream(With[U, T], ForwardStream[object]):
    """With over a sink that is also a stream; the stream side is untouched."""

    __slots__ = ()


def with_(sink: Sink[T], f: Callable[[U], object], error_type: type | None = None) -> With[U, T]:
    """Wrap a sink with an async item conversion, keeping its Stream side."""
    if isinstance(sink, Stream):
        return WithStream(sink, f, error_type)
    return With(sink, f, error_type)
