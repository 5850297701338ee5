"""Flatten a fallible future whose success value is itself a future."""

from __future__ import annotations

from typing import Generic, TypeVar

from polltask.foundation.core import Context, FusedFuture, Future, Poll, into_future
from polltask.foundation.errors import Err, Ok, Result, into_error

from .chain import Chain

T = TypeVar("T")
E = TypeVar("E")


class Flatten(FusedFuture[Result[T, E]], Generic[T, E]):
    """Resolve Future[Result[Future[Result[T, E]], E0]] to Result[T, E].

    The outer future runs first. Its Ok value is converted with
    into_future and polled to completion. An outer Err is converted with
    into_error(error, error_type) and resolves the adapter directly, the
    inner future is never built. Either phase failing is final.

    Example:
        >>> outer = ready(Ok(ready(Ok(7))))
        >>> block_on(Flatten(outer))
        Ok(7)
    """

    __slots__ = ("_chain", "_error_type")

    def __init__(self, future: Future[Result[object, object]], error_type: type[E] | None = None) -> None:
        self._chain: Chain[Result[object, object], Result[T, E], None] = Chain(future, None, name="Flatten")
        self._error_type = error_type

    def _continue(self, output: Result[object, object], _: None) -> Result[Future[Result[T, E]], Result[T, E]]:
        if output.is_err():
            return Err(Err(into_error(output.unwrap_err(), self._error_type)))
        return Ok(into_future(output.unwrap()))

    def poll(self, cx: Context) -> Poll[Result[T, E]]:
        return self._chain.poll(cx, self._continue)

    def is_terminated(self) -> bool:
        return self._chain.is_done()

    def get_ref(self) -> Future[object]:
        """Future of the live phase: the outer future, then the inner one.

        Raises:
            RuntimeError: If the adapter already resolved
        """
        future = self._chain.future
        if future is None:
            raise RuntimeError("Flatten already resolved")
        return future

    get_mut = get_ref

    def into_inner(self) -> Future[object]:
        """Return the live future and spend the adapter.

        Progress is discarded: after the outer phase finished, only the
        inner future comes back.
        """
        future = self.get_ref()
        self._chain.discard()
        return future


def flatten(future: Future[Result[object, object]], error_type: type[E] | None = None) -> Flatten[object, E]:
    return Flatten(future, error_type)
