"""Poll outcome of a single non-blocking attempt to advance a task.

A poll is either Ready(value) or Pending. Pending always means the task
registered the caller's waker and will wake it once progress is possible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

if TYPE_CHECKING:
    from polltask.foundation.errors import Result

T = TypeVar("T")
U = TypeVar("U")

_NOTHING = object()


class Poll(Generic[T]):
    """Discriminated union of Ready(value) and Pending.

    Examples:
        >>> Ready(3).map(lambda x: x + 1)
        Ready(4)
        >>> Pending().is_pending()
        True
        >>> Ready(Ok(1)).map_ok(str)
        Ready(Ok('1'))
    """

    __slots__ = ("_value",)

    def __init__(self, value: T | object) -> None:
        """Private constructor. Use Ready() or Pending() instead."""
        self._value = value

    def is_ready(self) -> bool:
        return self._value is not _NOTHING

    def is_pending(self) -> bool:
        return self._value is _NOTHING

    def unwrap(self) -> T:
        """Extract the ready value.

        Raises:
            RuntimeError: If the poll is pending
        """
        if self._value is _NOTHING:
            raise RuntimeError("Called unwrap() on Pending")
        return cast(T, self._value)

    def map(self, f: Callable[[T], U]) -> Poll[U]:
        """Apply f to a ready value, keep Pending."""
        if self._value is _NOTHING:
            return cast("Poll[U]", self)
        return Poll(f(cast(T, self._value)))

    def map_ok(self: Poll[Result[T, object]], f: Callable[[T], U]) -> Poll[Result[U, object]]:
        """Map the Ok side of a ready Result."""
        return self.map(lambda result: result.map(f))

    def map_err(self: Poll[Result[T, object]], f: Callable[[object], U]) -> Poll[Result[T, U]]:
        """Map the Err side of a ready Result."""
        return self.map(lambda result: result.map_err(f))

    def __bool__(self) -> bool:
        return self._value is not _NOTHING

    def __repr__(self) -> str:
        if self._value is _NOTHING:
            return "Pending"
        return f"Ready({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Poll):
            return NotImplemented
        return self._value is other._value or self._value == other._value

    def __hash__(self) -> int:
        return hash((Poll, self._value))


PENDING: Poll[object] = Poll(_NOTHING)


def Ready(value: T) -> Poll[T]:  # noqa: N802
    """Construct a ready poll."""
    return Poll(value)


def Pending() -> Poll[T]:  # noqa: N802
    """Return the shared pending poll."""
    return cast("Poll[T]", PENDING)
