"""Testing utilities for code built on polltask tasks."""

from .mock import (
    PARKED_STEP,
    PENDING_STEP,
    CountingWaker,
    Duplex,
    RecordingSink,
    ScriptedFuture,
    ScriptedStream,
)

__all__ = [
    "PARKED_STEP",
    "PENDING_STEP",
    "CountingWaker",
    "Duplex",
    "RecordingSink",
    "ScriptedFuture",
    "ScriptedStream",
]
