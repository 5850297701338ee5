"""polltask - Composable poll-based asynchronous primitives.

Three task contracts and an algebra of adapters over them:

- Future: a value task producing exactly one result
- Stream: a sequence task producing items, then exhaustion
- Sink: a consumer task with a ready / send / flush-close protocol

Every adapter is a small explicit state machine. A poll never blocks; a
task that cannot progress returns Pending after registering the caller's
waker. Driving the outermost task is left to a driver such as block_on or
into_awaitable.

Quick Start:
    >>> from polltask import Err, Ok, block_on, from_iter
    >>>
    >>> merged = from_iter([1, 3]).select(from_iter([2, 4]))
    >>> block_on(merged.collect())
    [1, 2, 3, 4]
    >>>
    >>> block_on(from_iter([Ok(1), Err("bad"), Ok(3)]).try_collect())
    Err('bad')

Sink transformation with backpressure:
    >>> from polltask import ListSink, ready
    >>> target = ListSink()
    >>> sink = target.with_(lambda raw: ready(Ok(raw.upper())))
    >>> block_on(sink.send("a"))
    Ok(None)
    >>> target.flushed
    ['A']

Future-of-future flattening:
    >>> block_on(ready(Ok(ready(Ok(7)))).flatten())
    Ok(7)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Task contracts
from .foundation.core import (
    PENDING,
    Context,
    ForwardSink,
    ForwardStream,
    FusedFuture,
    FusedStream,
    Future,
    Pending,
    Poll,
    Ready,
    Sink,
    Stream,
    Waker,
    into_future,
)

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    Ok,
    ProtocolError,
    ProtocolViolation,
    Result,
    into_error,
)

# Configuration
from .foundation.config import PolltaskSettings, clear_settings_cache, get_settings

# Value tasks
from .runtime.future import Chain, Flatten, flatten, lazy, pending, poll_fn, ready

# Sequence tasks
from .runtime.stream import (
    Collect,
    Fuse,
    Select,
    SelectNextSome,
    collect,
    empty,
    from_iter,
    fuse,
    once,
    select,
    select_next_some,
    stream_poll_fn,
)
from .runtime.try_stream import MapErr, TryCollect, map_err, try_collect

# Consumer tasks
from .runtime.sink import (
    Drain,
    ListSink,
    Send,
    SinkClosed,
    SinkErrInto,
    SinkMapErr,
    With,
    drain,
    send,
    sink_err_into,
    sink_map_err,
    with_,
)

# Drivers
from .runtime.interop import aiter_stream, block_on, block_on_stream, into_awaitable

# Observability
from .runtime.observability import configure_logging

__all__ = [
    # Version
    "__version__",
    # Task contracts
    "Poll", "Ready", "Pending", "PENDING", "Waker", "Context",
    "Future", "FusedFuture", "Stream", "FusedStream", "Sink", "into_future",
    "ForwardSink", "ForwardStream",
    # Errors
    "Result", "Ok", "Err", "ErrorCode", "ProtocolError", "ProtocolViolation", "into_error",
    # Configuration
    "PolltaskSettings", "get_settings", "clear_settings_cache",
    # Value tasks
    "ready", "pending", "poll_fn", "lazy", "Chain", "Flatten", "flatten",
    # Sequence tasks
    "from_iter", "empty", "once", "stream_poll_fn",
    "Fuse", "fuse", "Select", "select", "SelectNextSome", "select_next_some",
    "Collect", "collect", "MapErr", "map_err", "TryCollect", "try_collect",
    # Consumer tasks
    "Drain", "drain", "ListSink", "SinkClosed", "Send", "send",
    "SinkMapErr", "sink_map_err", "SinkErrInto", "sink_err_into", "With", "with_",
    # Drivers
    "block_on", "block_on_stream", "into_awaitable", "aiter_stream",
    # Observability
    "configure_logging",
]
