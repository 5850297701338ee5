"""Sequence-task leaves and combinators."""

from .collect import Collect, collect
from .fuse import Fuse, fuse
from .leaf import IterStream, StreamPollFn, empty, from_iter, once, stream_poll_fn
from .select import Select, select
from .select_next_some import SelectNextSome, select_next_some

__all__ = [
    "Collect", "collect",
    "Fuse", "fuse",
    "Select", "select",
    "SelectNextSome", "select_next_some",
    "IterStream", "StreamPollFn", "from_iter", "empty", "once", "stream_poll_fn",
]
