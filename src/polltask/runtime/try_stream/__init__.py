"""Combinators for streams whose items are Results."""

from .map_err import MapErr, MapErrSink, map_err
from .try_collect import TryCollect, try_collect

__all__ = ["MapErr", "MapErrSink", "map_err", "TryCollect", "try_collect"]
