"""Shared fixtures for polltask tests."""

from __future__ import annotations

import logging

import pytest

from polltask.foundation.config import clear_settings_cache
from polltask.foundation.core import Context
from polltask.foundation.testing import CountingWaker


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    """Reload settings from a clean environment for every test."""
    for var in ("POLLTASK_DEBUG_ASSERTIONS", "POLLTASK_LOG_LEVEL", "POLLTASK_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def release_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable debug assertions, protocol misuse is only logged."""
    monkeypatch.setenv("POLLTASK_DEBUG_ASSERTIONS", "false")
    clear_settings_cache()


@pytest.fixture
def waker() -> CountingWaker:
    return CountingWaker()


@pytest.fixture
def cx(waker: CountingWaker) -> Context:
    return waker.context()


@pytest.fixture
def clean_logger() -> object:
    """Restore the polltask logger after configure_logging."""
    root = logging.getLogger("polltask")
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
