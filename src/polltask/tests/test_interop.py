"""Tests for the drivers: block_on, block_on_stream, into_awaitable, aiter_stream."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from polltask import Ok, aiter_stream, block_on, block_on_stream, from_iter, pending, into_awaitable
from polltask.foundation.testing import PARKED_STEP, ScriptedFuture, ScriptedStream


def _release_from_thread(task) -> threading.Thread:
    """Fire the task's parked waker from another thread once it is parked."""

    def run() -> None:
        while task.parked is None:
            time.sleep(0.001)
        task.release()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread


# ─────────────────────────────────────────────────────────────────────────────
# Thread driver
# ─────────────────────────────────────────────────────────────────────────────


class TestBlockOn:
    """Driving tasks on the calling thread."""

    def test_ready_future(self) -> None:
        assert block_on(from_iter([1, 2]).collect()) == [1, 2]

    def test_woken_from_another_thread(self) -> None:
        fut = ScriptedFuture(Ok("v"), pending=[PARKED_STEP])
        thread = _release_from_thread(fut)
        assert block_on(fut, timeout=5) == Ok("v")
        thread.join(timeout=5)
        assert fut.polls == 2

    def test_timeout_without_wake(self) -> None:
        with pytest.raises(TimeoutError, match="not woken"):
            block_on(pending(), timeout=0.01)

    def test_block_on_stream(self) -> None:
        merged = from_iter([1, 2]).select(from_iter([3]))
        assert list(block_on_stream(merged)) == [1, 3, 2]

    def test_block_on_stream_parks(self) -> None:
        stream = ScriptedStream(["a", PARKED_STEP, "b"])
        items = block_on_stream(stream, timeout=5)
        assert next(items) == "a"
        _release_from_thread(stream)
        assert list(items) == ["b"]


# ─────────────────────────────────────────────────────────────────────────────
# asyncio driver
# ─────────────────────────────────────────────────────────────────────────────


class TestAsyncio:
    """Driving tasks from an event loop."""

    @pytest.mark.asyncio
    async def test_into_awaitable_ready(self) -> None:
        assert await into_awaitable(from_iter(["x"]).collect()) == ["x"]

    @pytest.mark.asyncio
    async def test_into_awaitable_woken_from_thread(self) -> None:
        fut = ScriptedFuture(Ok(1), pending=[PARKED_STEP])
        _release_from_thread(fut)
        assert await asyncio.wait_for(into_awaitable(fut), timeout=5) == Ok(1)

    @pytest.mark.asyncio
    async def test_into_awaitable_woken_from_loop(self) -> None:
        fut = ScriptedFuture(Ok(2), pending=[PARKED_STEP])
        loop = asyncio.get_running_loop()

        def release_when_parked() -> None:
            if fut.parked is None:
                loop.call_soon(release_when_parked)
                return
            fut.release()

        loop.call_soon(release_when_parked)
        assert await asyncio.wait_for(into_awaitable(fut), timeout=5) == Ok(2)

    @pytest.mark.asyncio
    async def test_aiter_stream(self) -> None:
        stream = ScriptedStream([1, PARKED_STEP, 2])
        _release_from_thread(stream)
        assert [item async for item in aiter_stream(stream)] == [1, 2]
