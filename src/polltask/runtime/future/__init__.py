"""Value-task leaves and combinators."""

from .chain import Chain
from .flatten import Flatten, flatten
from .leaf import Lazy, PendingFuture, PollFn, ReadyFuture, lazy, pending, poll_fn, ready

__all__ = [
    "Chain",
    "Flatten", "flatten",
    "ReadyFuture", "PendingFuture", "PollFn", "Lazy",
    "ready", "pending", "poll_fn", "lazy",
]
