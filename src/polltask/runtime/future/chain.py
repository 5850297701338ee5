"""Two-phase future engine shared by sequencing combinators.

Phase one polls the first future to completion and hands its output to a
continuation. The continuation either produces the second future, which is
then polled to completion, or finishes the chain immediately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from polltask.foundation.core import Context, Future, Pending, Poll, Ready
from polltask.foundation.errors import ErrorCode, Result, debug_assert

A = TypeVar("A")
B = TypeVar("B")
D = TypeVar("D")

logger = logging.getLogger("polltask.future")


@dataclass(frozen=True, slots=True)
class First(Generic[A, D]):
    future: Future[A]
    data: D


@dataclass(frozen=True, slots=True)
class Second(Generic[B]):
    future: Future[B]


@dataclass(frozen=True, slots=True)
class Done:
    pass


ChainState = First | Second | Done


class Chain(Generic[A, B, D]):
    """State machine First(future, data) -> Second(future) -> Done.

    Exactly one phase is live at a time. After the chain resolves it is
    Done for good and must not be polled again.
    """

    __slots__ = ("_state", "_name")

    def __init__(self, first: Future[A], data: D, *, name: str = "Chain") -> None:
        self._state: ChainState = First(first, data)
        self._name = name

    @property
    def state(self) -> ChainState:
        return self._state

    def is_done(self) -> bool:
        return isinstance(self._state, Done)

    @property
    def future(self) -> Future[A] | Future[B] | None:
        """Future of the live phase, None once Done."""
        match self._state:
            case First(future, _) | Second(future):
                return future
        return None

    def discard(self) -> None:
        self._state = Done()

    def poll(self, cx: Context, f: Callable[[A, D], Result[Future[B], B]]) -> Poll[B]:
        """Advance the live phase.

        f receives the first phase's output and its data. Ok(future) starts
        the second phase, Err(output) resolves the chain with output.
        """
        match self._state:
            case First(future, data):
                polled = future.poll(cx)
                if polled.is_pending():
                    return polled  # type: ignore[return-value]
                self._state = Done()
                step = f(polled.unwrap(), data)
                if step.is_err():
                    logger.debug("%s: resolved in first phase", self._name)
                    return Ready(step.unwrap_err())
                logger.debug("%s: first phase complete, entering second", self._name)
                self._state = Second(step.unwrap())
            case Done():
                debug_assert(False, ErrorCode.POLLED_AFTER_COMPLETION, self._name, "polled after completion")
                return Pending()

        polled = self._state.future.poll(cx)  # type: ignore[union-attr]
        if polled.is_ready():
            self._state = Done()
        return polled
