"""Task contracts: value tasks, sequence tasks and consumer tasks.

Every task is advanced by an external driver through non-blocking poll
calls. A task that cannot make progress returns Pending after arranging
for the context's waker to be invoked once progress becomes possible.

Contract every implementation keeps:
    1. Never return Pending without registering the given waker on a path
       that eventually fires.
    2. Never poll an inner task after it reported final completion.
    3. Never block inside a poll call.

Wakes are at-least-once and may be spurious, so polls must be safe to
repeat with no effect beyond re-deriving the current state.

Example:
    >>> from polltask import from_iter, block_on
    >>> block_on(from_iter([1, 2, 3]).collect())
    [1, 2, 3]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from polltask.foundation.errors import Result

from .poll import Poll

if TYPE_CHECKING:
    from collections.abc import MutableSequence

    from polltask.runtime.future.flatten import Flatten
    from polltask.runtime.sink.err_into import SinkErrInto
    from polltask.runtime.sink.map_err import SinkMapErr
    from polltask.runtime.sink.send import Send
    from polltask.runtime.sink.with_ import With
    from polltask.runtime.stream.collect import Collect
    from polltask.runtime.stream.fuse import Fuse
    from polltask.runtime.stream.select import Select
    from polltask.runtime.stream.select_next_some import SelectNextSome
    from polltask.runtime.try_stream.map_err import MapErr
    from polltask.runtime.try_stream.try_collect import TryCollect

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


def _noop() -> None:
    return None


class Waker:
    """Handle a task invokes to ask its driver for another poll."""

    __slots__ = ("_wake",)

    def __init__(self, wake: Callable[[], object]) -> None:
        self._wake = wake

    def wake(self) -> None:
        self._wake()

    def will_wake(self, other: Waker) -> bool:
        """Whether both wakers would wake the same driver."""
        return self._wake == other._wake

    @classmethod
    def noop(cls) -> Waker:
        return cls(_noop)

    def __repr__(self) -> str:
        return f"Waker({self._wake!r})"


@dataclass(frozen=True, slots=True)
class Context:
    """Per-poll context handed down the adapter chain."""

    waker: Waker

    @classmethod
    def from_waker(cls, waker: Waker) -> Context:
        return cls(waker)


# ─────────────────────────────────────────────────────────────────────────────
# Value Task
# ─────────────────────────────────────────────────────────────────────────────


class Future(ABC, Generic[T]):
    """A computation that eventually produces exactly one result.

    Once poll returned Ready it must not be polled again.
    """

    __slots__ = ()

    @abstractmethod
    def poll(self, cx: Context) -> Poll[T]:
        """Attempt to resolve without blocking."""

    def flatten(self, error_type: type | None = None) -> Flatten[object, object]:
        """Resolve a fallible future-of-a-future to the inner result."""
        from polltask.runtime.future.flatten import Flatten
        return Flatten(self, error_type)


class FusedFuture(Future[T]):
    """Value task that can report whether it already resolved."""

    __slots__ = ()

    @abstractmethod
    def is_terminated(self) -> bool:
        """True once the future resolved and must not be polled again."""


def into_future(value: object) -> Future[object]:
    """Convert a value into a value task.

    Futures are returned unchanged, a Result becomes an immediately ready
    future of itself and objects defining ``into_future()`` convert
    through it.

    Raises:
        TypeError: If the value cannot become a future
    """
    if isinstance(value, Future):
        return value
    if isinstance(value, Result):
        from polltask.runtime.future.leaf import ready
        return ready(value)
    convert = getattr(value, "into_future", None)
    if callable(convert):
        return convert()
    raise TypeError(f"{type(value).__name__} cannot be converted into a future")


# ─────────────────────────────────────────────────────────────────────────────
# Sequence Task
# ─────────────────────────────────────────────────────────────────────────────


class Stream(ABC, Generic[T]):
    """A computation producing zero or more items, then exhaustion.

    poll_next returns Ready(item), Ready(None) on exhaustion, or Pending.
    Items are never None.
    """

    __slots__ = ()

    @abstractmethod
    def poll_next(self, cx: Context) -> Poll[T | None]:
        """Attempt to pull the next item without blocking."""

    def fuse(self) -> Fuse[T]:
        from polltask.runtime.stream.fuse import Fuse
        return Fuse(self)

    def select(self, other: Stream[T]) -> Select[T]:
        """Merge with another stream, alternating priority between them."""
        from polltask.runtime.stream.select import Select
        return Select(self, other)

    def collect(self, factory: Callable[[], MutableSequence[T]] = list) -> Collect[T]:
        """Drain the stream into a container, in production order."""
        from polltask.runtime.stream.collect import Collect
        return Collect(self, factory)

    # Fallible streams (items are Results)

    def map_err(self: Stream[Result[U, E]], f: Callable[[E], F]) -> MapErr[U, E, F]:
        """Map the error of every erroring item through f."""
        from polltask.runtime.try_stream.map_err import map_err
        return map_err(self, f)

    def try_collect(
        self: Stream[Result[U, E]],
        factory: Callable[[], MutableSequence[U]] = list,
    ) -> TryCollect[U, E]:
        """Collect Ok items, short-circuiting on the first Err."""
        from polltask.runtime.try_stream.try_collect import TryCollect
        return TryCollect(self, factory)


class FusedStream(Stream[T]):
    """Sequence task that remembers exhaustion."""

    __slots__ = ()

    @abstractmethod
    def is_terminated(self) -> bool:
        """True once the stream reported exhaustion."""

    def select_next_some(self) -> SelectNextSome[T]:
        """Future for the next item; stays pending once the stream is exhausted."""
        from polltask.runtime.stream.select_next_some import SelectNextSome
        return SelectNextSome(self)


# ─────────────────────────────────────────────────────────────────────────────
# Consumer Task
# ─────────────────────────────────────────────────────────────────────────────


class Sink(ABC, Generic[T]):
    """A consumer with a ready / send / flush-close capacity protocol.

    poll_ready must report Ready(Ok(None)) before each start_send.
    """

    __slots__ = ()

    @abstractmethod
    def poll_ready(self, cx: Context) -> Poll[Result[None, object]]:
        """Check for capacity to accept one item."""

    @abstractmethod
    def start_send(self, item: T) -> Result[None, object]:
        """Hand one item over. Only valid right after a ready poll_ready."""

    @abstractmethod
    def poll_flush(self, cx: Context) -> Poll[Result[None, object]]:
        """Drain buffered work."""

    @abstractmethod
    def poll_close(self, cx: Context) -> Poll[Result[None, object]]:
        """Drain buffered work and release resources."""

    def send(self, item: T) -> Send:
        """Future that sends one item and flushes."""
        from polltask.runtime.sink.send import Send
        return Send(self, item)

    def sink_map_err(self, f: Callable[[object], F]) -> SinkMapErr[T, F]:
        from polltask.runtime.sink.map_err import sink_map_err
        return sink_map_err(self, f)

    def sink_err_into(self, error_type: type[F]) -> SinkErrInto[T, F]:
        from polltask.runtime.sink.err_into import sink_err_into
        return sink_err_into(self, error_type)

    def with_(self, f: Callable[[U], object], error_type: type | None = None) -> With[U, T]:
        """Run each incoming item through an async conversion before sending."""
        from polltask.runtime.sink.with_ import with_
        return with_(self, f, error_type)
