"""Tests for Collect and TryCollect.

Validates:
- Collect yields every item, in order, exactly once
- TryCollect short-circuits on the first error
- Neither future may be polled after resolving
"""

from __future__ import annotations

from collections import deque

import pytest

from polltask import Err, ErrorCode, Ok, ProtocolViolation, Ready, block_on, collect, from_iter, try_collect
from polltask.foundation.testing import PARKED_STEP, PENDING_STEP, CountingWaker, ScriptedStream


# ─────────────────────────────────────────────────────────────────────────────
# Collect
# ─────────────────────────────────────────────────────────────────────────────


class TestCollect:
    """Draining a stream into a container."""

    def test_collects_all_items_in_order(self, cx) -> None:
        assert collect(from_iter([1, 2, 3])).poll(cx) == Ready([1, 2, 3])

    def test_empty_stream(self, cx) -> None:
        assert from_iter([]).collect().poll(cx) == Ready([])

    def test_pending_between_items(self, cx, waker: CountingWaker) -> None:
        stream = ScriptedStream([1, PENDING_STEP, 2, PARKED_STEP, 3])
        fut = stream.collect()

        assert fut.poll(cx).is_pending()
        assert waker.count == 1
        assert fut.poll(cx).is_pending()
        stream.release()
        assert fut.poll(cx) == Ready([1, 2, 3])
        assert fut.is_terminated()
        assert stream.exhausted

    def test_custom_container(self, cx) -> None:
        assert collect(from_iter("abc"), deque).poll(cx) == Ready(deque(["a", "b", "c"]))

    def test_polled_after_completion_raises(self, cx) -> None:
        """ScriptedStream would raise AssertionError if polled again."""
        fut = ScriptedStream([1]).collect()
        fut.poll(cx)

        with pytest.raises(ProtocolViolation) as exc_info:
            fut.poll(cx)
        assert exc_info.value.error.code == ErrorCode.POLLED_AFTER_COMPLETION
        assert exc_info.value.error.adapter == "Collect"

    def test_polled_after_completion_release_mode(self, cx, release_mode) -> None:
        fut = ScriptedStream([1]).collect()
        assert fut.poll(cx) == Ready([1])
        assert fut.poll(cx).is_pending()

    def test_block_on_merged(self) -> None:
        merged = from_iter([1, 3]).select(from_iter([2, 4]))
        assert block_on(merged.collect()) == [1, 2, 3, 4]

    def test_factory_called_once(self, cx) -> None:
        built: list[list[int]] = []

        def factory() -> list[int]:
            built.append([])
            return built[-1]

        items = collect(from_iter([1]), factory).poll(cx).unwrap()
        assert len(built) == 1
        assert items is built[0]

    def test_falsy_items_kept(self) -> None:
        assert block_on(collect(from_iter([0, "", False]))) == [0, "", False]

    def test_none_item_raises(self) -> None:
        """None cannot travel as an item, so it is not mistaken for the end."""
        with pytest.raises(TypeError, match="cannot be None"):
            block_on(collect(from_iter([1, None, 2])))


# ─────────────────────────────────────────────────────────────────────────────
# TryCollect
# ─────────────────────────────────────────────────────────────────────────────


class TestTryCollect:
    """Fallible collection with short-circuit."""

    def test_all_ok(self, cx) -> None:
        assert try_collect(from_iter([Ok(1), Ok(2)])).poll(cx) == Ready(Ok([1, 2]))

    def test_empty_stream_is_ok(self, cx) -> None:
        assert from_iter([]).try_collect().poll(cx) == Ready(Ok([]))

    def test_short_circuits_on_first_error(self, cx) -> None:
        stream = ScriptedStream([Ok(1), Ok(2), Err("e"), Ok(3)])
        fut = stream.try_collect()

        assert fut.poll(cx) == Ready(Err("e"))
        assert stream.remaining == 1
        assert stream.polls == 3
        assert fut.is_terminated()

    def test_container_built_lazily(self, cx) -> None:
        built: list[list[int]] = []

        def factory() -> list[int]:
            built.append([])
            return built[-1]

        assert try_collect(from_iter([Err("e")]), factory).poll(cx) == Ready(Err("e"))
        assert built == []

        assert try_collect(from_iter([Ok(1), Ok(2)]), factory).poll(cx) == Ready(Ok([1, 2]))
        assert len(built) == 1

    def test_partial_items_never_surface(self, cx) -> None:
        built: list[list[int]] = []

        def factory() -> list[int]:
            built.append([])
            return built[-1]

        result = try_collect(from_iter([Ok(1), Err("e")]), factory).poll(cx).unwrap()
        assert result == Err("e")
        assert built == [[1]]

    def test_pending_then_error(self, cx) -> None:
        stream = ScriptedStream([Ok(1), PARKED_STEP, Err("late")])
        fut = stream.try_collect()
        assert fut.poll(cx).is_pending()
        stream.release()
        assert fut.poll(cx) == Ready(Err("late"))

    def test_polled_after_completion_raises(self, cx) -> None:
        fut = from_iter([Err("e")]).try_collect()
        fut.poll(cx)
        with pytest.raises(ProtocolViolation):
            fut.poll(cx)

    def test_map_err_then_try_collect(self) -> None:
        stream = from_iter([Ok(1), Err("bad"), Ok(3)]).map_err(str.upper)
        assert block_on(stream.try_collect()) == Err("BAD")
