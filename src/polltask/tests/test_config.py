"""Tests for settings, protocol errors and logging setup."""

from __future__ import annotations

import io
import logging

import orjson
import pytest
from pydantic import ValidationError

from polltask import ErrorCode, ProtocolError, ProtocolViolation, configure_logging, get_settings, into_error
from polltask.foundation.errors import debug_assert
from polltask.runtime.observability import get_logger


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────


class TestSettings:
    """Environment-driven configuration."""

    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.debug_assertions is True
        assert settings.logging.level == "WARNING"
        assert settings.logging.format == "text"

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from polltask import clear_settings_cache

        monkeypatch.setenv("POLLTASK_DEBUG_ASSERTIONS", "false")
        monkeypatch.setenv("POLLTASK_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("POLLTASK_LOG_FORMAT", "json")
        clear_settings_cache()

        settings = get_settings()
        assert settings.debug_assertions is False
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "json"


# ─────────────────────────────────────────────────────────────────────────────
# Protocol errors
# ─────────────────────────────────────────────────────────────────────────────


class TestProtocolError:
    """Structured protocol violations."""

    def test_render(self) -> None:
        error = ProtocolError(adapter="Collect", message="polled after completion", code=ErrorCode.POLLED_AFTER_COMPLETION)
        assert str(error) == "[POLLED_AFTER_COMPLETION] Collect: polled after completion"
        assert error.is_completion_error

    def test_frozen(self) -> None:
        error = ProtocolError(adapter="With", message="busy")
        assert error.code == ErrorCode.INVALID_STATE
        with pytest.raises(ValidationError):
            error.adapter = "Other"

    def test_empty_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProtocolError(adapter="", message="x")

    def test_violation_wraps_error(self) -> None:
        violation = ProtocolViolation.create("Send", "polled after completion", ErrorCode.POLLED_AFTER_COMPLETION)
        assert violation.error.adapter == "Send"
        assert "Send: polled after completion" in str(violation)

    def test_debug_assert_logs_in_release_mode(self, release_mode, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="polltask.errors"):
            assert debug_assert(False, ErrorCode.INVALID_STATE, "Test", "broken") is False
        assert "[INVALID_STATE] Test: broken" in caplog.text

    def test_debug_assert_passes(self) -> None:
        assert debug_assert(True, ErrorCode.INVALID_STATE, "Test", "fine") is True


class TestIntoError:
    """Error-type conversion rule."""

    def test_identity_without_target(self) -> None:
        error = object()
        assert into_error(error, None) is error

    def test_identity_for_instances(self) -> None:
        error = KeyError("k")
        assert into_error(error, LookupError) is error

    def test_constructor_fallback(self) -> None:
        converted = into_error("boom", RuntimeError)
        assert isinstance(converted, RuntimeError)
        assert converted.args == ("boom",)


# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────


class TestLogging:
    """configure_logging output formats."""

    def test_json_lines(self, clean_logger) -> None:
        output = io.StringIO()
        configure_logging(format="json", level="DEBUG", output=output)
        get_logger("stream").debug("Select: both sources exhausted")

        entry = orjson.loads(output.getvalue().splitlines()[-1])
        assert entry["event"] == "Select: both sources exhausted"
        assert entry["level"] == "debug"
        assert entry["logger"] == "polltask.stream"

    def test_text_respects_level(self, clean_logger) -> None:
        output = io.StringIO()
        configure_logging(format="text", level="WARNING", output=output)
        get_logger("sink").debug("hidden")
        get_logger("sink").warning("shown")

        assert "hidden" not in output.getvalue()
        assert "[WARNING] polltask.sink: shown" in output.getvalue()

    def test_reconfigure_replaces_handler(self, clean_logger) -> None:
        configure_logging(output=io.StringIO())
        root = configure_logging(output=io.StringIO())
        assert len(root.handlers) == 1
        assert root.propagate is False

    def test_unknown_format(self, clean_logger) -> None:
        with pytest.raises(ValueError, match="Unknown format"):
            configure_logging(format="xml")
