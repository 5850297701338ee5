"""Leaf value tasks: ready, pending, poll_fn and lazy."""

from __future__ import annotations

from typing import Callable, TypeVar

from polltask.foundation.core import Context, FusedFuture, Future, Pending, Poll, Ready
from polltask.foundation.errors import ErrorCode, debug_assert

T = TypeVar("T")

_UNSET = object()


class ReadyFuture(FusedFuture[T]):
    """Future that resolves immediately with a stored value."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value: T | object = value

    def poll(self, cx: Context) -> Poll[T]:
        if not debug_assert(
            self._value is not _UNSET, ErrorCode.POLLED_AFTER_COMPLETION, "Ready", "polled after completion"
        ):
            return Pending()
        value, self._value = self._value, _UNSET
        return Ready(value)  # type: ignore[arg-type]

    def is_terminated(self) -> bool:
        return self._value is _UNSET

    def into_inner(self) -> T:
        if self._value is _UNSET:
            raise RuntimeError("Ready value already taken")
        return self._value  # type: ignore[return-value]


class PendingFuture(FusedFuture[T]):
    """Future that never resolves and never wakes its driver."""

    __slots__ = ()

    def poll(self, cx: Context) -> Poll[T]:
        return Pending()

    def is_terminated(self) -> bool:
        return True


class PollFn(Future[T]):
    """Future whose poll delegates to a plain function of the context."""

    __slots__ = ("_f",)

    def __init__(self, f: Callable[[Context], Poll[T]]) -> None:
        self._f = f

    def poll(self, cx: Context) -> Poll[T]:
        return self._f(cx)


class Lazy(FusedFuture[T]):
    """Future running a closure on its first poll."""

    __slots__ = ("_f",)

    def __init__(self, f: Callable[[], T]) -> None:
        self._f: Callable[[], T] | None = f

    def poll(self, cx: Context) -> Poll[T]:
        if not debug_assert(
            self._f is not None, ErrorCode.POLLED_AFTER_COMPLETION, "Lazy", "polled after completion"
        ):
            return Pending()
        f, self._f = self._f, None
        return Ready(f())  # type: ignore[misc]

    def is_terminated(self) -> bool:
        return self._f is None


def ready(value: T) -> ReadyFuture[T]:
    """Future resolving immediately with value.

    Example:
        >>> block_on(ready(Ok(1)))
        Ok(1)
    """
    return ReadyFuture(value)


def pending() -> PendingFuture[object]:
    return PendingFuture()


def poll_fn(f: Callable[[Context], Poll[T]]) -> PollFn[T]:
    return PollFn(f)


def lazy(f: Callable[[], T]) -> Lazy[T]:
    return Lazy(f)
