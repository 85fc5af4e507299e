"""Tests for configuration system."""

import pytest

from container_hooks.config import (
    Settings,
    get_settings,
    override_settings,
    reset_settings,
)
from container_hooks.core.errors import ConfigurationError


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.log_mask_sensitive is True
        assert settings.state_pid_source == "thread"
        assert settings.trace_spans is True

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        settings = Settings(
            log_level="debug",
            log_json=True,
            state_pid_source="process",
        )
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.state_pid_source == "process"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")

    def test_invalid_pid_source(self) -> None:
        with pytest.raises(ValueError):
            Settings(state_pid_source="container")  # type: ignore[arg-type]

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables use the CONTAINER_HOOKS_ prefix."""
        monkeypatch.setenv("CONTAINER_HOOKS_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("CONTAINER_HOOKS_STATE_PID_SOURCE", "process")
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.state_pid_source == "process"


class TestSettingsInjection:
    """Tests for settings dependency injection."""

    def test_get_settings_returns_singleton(self) -> None:
        """Test that get_settings returns same instance."""
        reset_settings()
        try:
            assert get_settings() is get_settings()
        finally:
            reset_settings()

    def test_override_settings(self) -> None:
        """Test settings override for testing."""
        custom = Settings(state_pid_source="process")
        override_settings(custom)
        try:
            assert get_settings() is custom
        finally:
            reset_settings()

    def test_reset_settings(self) -> None:
        """Test that reset forces a reload."""
        custom = Settings(log_level="ERROR")
        override_settings(custom)
        reset_settings()
        try:
            assert get_settings() is not custom
        finally:
            reset_settings()

    def test_invalid_environment_raises_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTAINER_HOOKS_LOG_LEVEL", "LOUD")
        reset_settings()
        try:
            with pytest.raises(ConfigurationError, match="Invalid configuration"):
                get_settings()
        finally:
            reset_settings()
