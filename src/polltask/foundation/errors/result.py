"""Ok/Err outcome carried by fallible tasks.

A fallible future resolves with a Result, a fallible stream yields one per
item and every sink operation reports one. The Err payload is usually an
exception instance, but any object is accepted. Results are immutable;
combinators build new ones and never raise on their own.

    Ok(2).map(lambda n: n + 1)            -> Ok(3)
    Err("io").map_err(str.upper)          -> Err('IO')
    Ok(2).flat_map(lambda n: Err(n))      -> Err(2)
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Success (Ok) or failure (Err) of a single task step.

    Example:
        >>> Ok(21).map(lambda n: n * 2)
        Ok(42)
        >>> Err("refused").map_err(lambda e: f"sink: {e}")
        Err('sink: refused')

    Results sit on every poll path, hence the slots.
    """

    __slots__ = ("_payload", "_ok")
    __match_args__ = ("_payload",)

    def __init__(self, payload: T | E, ok: bool) -> None:
        """Use Ok() or Err()."""
        self._payload = payload
        self._ok = ok

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    def unwrap(self) -> T:
        """Success payload.

        Raises:
            RuntimeError: On an Err
        """
        if not self._ok:
            raise RuntimeError(f"Called unwrap() on Err value: {self._payload!r}")
        return cast(T, self._payload)

    def unwrap_err(self) -> E:
        """Failure payload.

        Raises:
            RuntimeError: On an Ok
        """
        if self._ok:
            raise RuntimeError(f"Called unwrap_err() on Ok value: {self._payload!r}")
        return cast(E, self._payload)

    # ─────────────────────────────────────────────────────────────────
    # Combinators
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        if not self._ok:
            return cast("Result[U, E]", self)
        return Result(f(cast(T, self._payload)), True)

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the failure payload.

        f is only called for an Err. An Ok comes back as the very same
        object, so adapters mapping errors never touch successful items.
        """
        if self._ok:
            return cast("Result[T, F]", self)
        return Result(f(cast(E, self._payload)), False)

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Continue with f on success, short-circuit on failure."""
        if not self._ok:
            return cast("Result[U, E]", self)
        return f(cast(T, self._payload))

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Fold both variants into one value."""
        return ok(cast(T, self._payload)) if self._ok else err(cast(E, self._payload))

    def __bool__(self) -> bool:
        return self._ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._ok else 'Err'}({self._payload!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Result):
            return self._ok is other._ok and self._payload == other._payload
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Result, self._ok, self._payload))


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    return Result(value, True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    return Result(error, False)
