"""
Configuration for Tasmee library.

Settings are read from environment variables prefixed with ``TASMEE_``
(or a local ``.env`` file) and can be overridden in code:

    from tasmee import configure

    configure(local_accept_threshold=0.75, debounce_seconds=0.5)
"""

from typing import Any, Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasmee.exceptions import ConfigurationError


class TasmeeSettings(BaseSettings):
    """
    Runtime settings for verification and sessions.

    Attributes:
        local_accept_threshold: Minimum similarity for the local matcher to accept a word
        remote_accept_threshold: Confidence the remote model must have to accept a word
        remote_enabled: Whether remote verification may be used at all
        gemini_api_key: API key for the hosted model (remote is disabled without one)
        gemini_model: Model name used for remote verification
        gemini_base_url: Base URL of the generateContent REST API
        remote_timeout_seconds: Upper bound for one remote round trip
        debounce_seconds: Quiet period before an input triggers verification
        log_level: Level passed to configure_logging by callers that want it
    """

    model_config = SettingsConfigDict(
        env_prefix="TASMEE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    local_accept_threshold: float = Field(
        default=0.7,
        description="Minimum similarity for the local matcher to accept a word",
        ge=0.0,
        le=1.0,
    )
    remote_accept_threshold: float = Field(
        default=0.8,
        description="Confidence the remote model must have to accept a word",
        ge=0.0,
        le=1.0,
    )
    remote_enabled: bool = Field(
        default=True,
        description="Whether remote verification may be used at all",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="API key for the hosted verification model",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        description="Model name used for remote verification",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generateContent REST API",
    )
    remote_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for one remote verification round trip",
        gt=0.0,
    )
    debounce_seconds: float = Field(
        default=1.0,
        description="Quiet period before an input triggers verification",
        gt=0.0,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level name",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def remote_configured(self) -> bool:
        """Whether remote verification is enabled and has credentials."""
        return self.remote_enabled and bool(self.gemini_api_key)


_settings: TasmeeSettings | None = None


def get_settings() -> TasmeeSettings:
    """
    Get the process-wide settings instance.

    Built from the environment on first use, then cached.

    Returns:
        The current TasmeeSettings
    """
    global _settings
    if _settings is None:
        _settings = TasmeeSettings()
    return _settings


def configure(**overrides: Any) -> TasmeeSettings:
    """
    Replace the cached settings with a copy carrying the given overrides.

    Args:
        **overrides: Setting names and values

    Returns:
        The new settings instance

    Raises:
        ConfigurationError: If a value fails validation
    """
    global _settings
    current = get_settings()
    try:
        settings = TasmeeSettings(**{**current.model_dump(), **overrides})
    except ValidationError as e:
        names = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigurationError(f"Invalid settings: {e}", setting_name=names or None)

    _settings = settings
    return settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
