"""Configuration system for container hook execution."""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from container_hooks.core.errors import ConfigurationError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Container hooks configuration."""

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON structured log records",
    )
    log_mask_sensitive: bool = Field(
        default=True,
        description="Mask passwords, tokens and API keys in log output",
    )

    # Hook state
    state_pid_source: Literal["thread", "process"] = Field(
        default="thread",
        description="Report the invoking thread id or the process id as 'pid'",
    )

    # Tracing
    trace_spans: bool = Field(
        default=True,
        description="Log span boundaries at DEBUG level from the CLI",
    )

    model_config = {
        "env_prefix": "CONTAINER_HOOKS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level


# Settings singleton with dependency injection support
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The Settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new Settings instance to use.

    Example:
        from container_hooks.config import override_settings, Settings
        override_settings(Settings(state_pid_source="process"))
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None

