"""Protocol-violation errors and error conversion.

Inner-task failures travel as Err values and never raise. Breaking the
poll protocol (polling a finished task, sending into a sink that did not
report ready) is a programming error: it raises ProtocolViolation while
debug assertions are enabled and is only logged otherwise.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Annotated, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from polltask.foundation.config import get_settings

E = TypeVar("E")

logger = logging.getLogger("polltask.errors")


class ErrorCode(StrEnum):
    """Classification of poll-protocol violations."""
    POLLED_AFTER_COMPLETION = "POLLED_AFTER_COMPLETION"
    POLLED_AFTER_TERMINATION = "POLLED_AFTER_TERMINATION"
    NOT_READY_FOR_SEND = "NOT_READY_FOR_SEND"
    INVALID_STATE = "INVALID_STATE"


class ProtocolError(BaseModel):
    """Structured description of a protocol violation.

    Attributes:
        adapter: Name of the task or adapter that detected the violation
        message: Human-readable explanation
        code: Machine-readable classification
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "title": "Protocol Error",
            "description": "Poll protocol violated by the caller",
            "examples": [{
                "adapter": "Collect",
                "message": "polled after it already resolved",
                "code": "POLLED_AFTER_COMPLETION",
            }],
        },
    )

    adapter: Annotated[str, Field(min_length=1, description="Task or adapter that detected the violation")]
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.INVALID_STATE, description="Violation classification")

    @computed_field
    @property
    def is_completion_error(self) -> bool:
        """Whether a finished task was polled again."""
        return self.code in (ErrorCode.POLLED_AFTER_COMPLETION, ErrorCode.POLLED_AFTER_TERMINATION)

    def render(self) -> str:
        return f"[{self.code}] {self.adapter}: {self.message}"

    __str__ = render


class ProtocolViolation(Exception):
    """Exception wrapping a ProtocolError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ProtocolError) -> None:
        self.error = error
        super().__init__(error.render())

    @classmethod
    def create(cls, adapter: str, message: str, code: ErrorCode = ErrorCode.INVALID_STATE) -> Self:
        return cls(ProtocolError(adapter=adapter, message=message, code=code))


def debug_assert(condition: bool, code: ErrorCode, adapter: str, message: str) -> bool:
    """Check a protocol invariant.

    Returns True when the invariant holds. A violated invariant raises
    ProtocolViolation under debug assertions, otherwise it is logged and
    False is returned so the caller can fall back to a non-crashing path.
    """
    if condition:
        return True
    error = ProtocolError(adapter=adapter, message=message, code=code)
    if get_settings().debug_assertions:
        logger.error(error.render())
        raise ProtocolViolation(error)
    logger.warning(error.render())
    return False


def into_error(error: object, target: type[E] | None) -> E:
    """Convert an error into the target error type.

    Identity when no target is given or the error already has the target
    type. A target defining a ``from_error`` classmethod converts through it,
    any other target is called with the error.
    """
    if target is None or isinstance(error, target):
        return error  # type: ignore[return-value]
    from_error = getattr(target, "from_error", None)
    if callable(from_error):
        return from_error(error)
    return target(error)  # type: ignore[call-arg]
