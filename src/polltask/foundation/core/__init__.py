"""Task contracts and the poll protocol."""

from .forward import ForwardSink, ForwardStream
from .poll import PENDING, Pending, Poll, Ready
from .task import Context, FusedFuture, FusedStream, Future, Sink, Stream, Waker, into_future

__all__ = [
    # Poll protocol
    "Poll", "Ready", "Pending", "PENDING", "Waker", "Context",
    # Task contracts
    "Future", "FusedFuture", "Stream", "FusedStream", "Sink", "into_future",
    # Capability forwarding
    "ForwardSink", "ForwardStream",
]
