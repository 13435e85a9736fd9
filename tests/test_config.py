"""Tests for configuration and the default diagnostic sink."""

import logging

import pytest

from persistent_thrust.config import (
    DEFAULT_MESSAGE_DURATION,
    DEFAULT_SAMPLE_PERIOD,
    PersistentThrustConfig,
)
from persistent_thrust.diagnostics import LoggingDiagnostics, ScreenMessage


class TestPersistentThrustConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self) -> None:
        config = PersistentThrustConfig()
        assert not config.persistent_enabled
        assert not config.request_massless_propellant
        assert config.request_massed_propellant
        assert config.sample_period == DEFAULT_SAMPLE_PERIOD == 16
        assert config.message_duration == DEFAULT_MESSAGE_DURATION == 5.0
        assert not config.record_history

    def test_invalid_sample_period(self) -> None:
        with pytest.raises(ValueError, match="sample_period"):
            PersistentThrustConfig(sample_period=0)

    def test_invalid_message_duration(self) -> None:
        with pytest.raises(ValueError, match="message_duration"):
            PersistentThrustConfig(message_duration=0.0)

    def test_flags_are_mutable(self) -> None:
        config = PersistentThrustConfig()
        config.persistent_enabled = True
        assert config.persistent_enabled


class TestLoggingDiagnostics:
    """Test the logging-backed sink."""

    def test_post_message_kept_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingDiagnostics()
        with caplog.at_level(logging.WARNING, logger="persistent_thrust"):
            sink.post_message("Thrust warp stopped - propellant depleted", 5.0)

        assert sink.messages == [
            ScreenMessage("Thrust warp stopped - propellant depleted", 5.0)
        ]
        assert "propellant depleted" in caplog.text

    def test_log_line(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingDiagnostics()
        with caplog.at_level(logging.INFO, logger="persistent_thrust"):
            sink.log("[PersistentThrust] engine skipped step")

        assert sink.messages == []
        assert "skipped step" in caplog.text

    def test_clear(self) -> None:
        sink = LoggingDiagnostics()
        sink.post_message("hello", 1.0)
        sink.clear()
        assert sink.messages == []
