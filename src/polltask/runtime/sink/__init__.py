"""Consumer-task leaves and combinators."""

from .err_into import SinkErrInto, SinkErrIntoStream, sink_err_into
from .leaf import Drain, ListSink, SinkClosed, drain
from .map_err import SinkMapErr, SinkMapErrStream, sink_map_err
from .send import Send, send
from .with_ import Buffered, Empty, Processing, With, WithStream, with_

__all__ = [
    "SinkMapErr", "SinkMapErrStream", "sink_map_err",
    "SinkErrInto", "SinkErrIntoStream", "sink_err_into",
    "With", "WithStream", "with_", "Empty", "Processing", "Buffered",
    "Send", "send",
    "Drain", "ListSink", "SinkClosed", "drain",
]
