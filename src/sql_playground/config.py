"""
Configuration
=============

Runtime settings read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from sql_playground.exceptions import ConfigurationError


DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"

Number = TypeVar("Number", int, float)


def env_number(name: str, default: Number, cast: Callable[[str], Number]) -> Number:
    """Read a numeric environment variable, naming it when the value is bad."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        expected = "an integer" if cast is int else "a number"
        raise ConfigurationError(name, raw, expected) from e


@dataclass
class Settings:
    """Service settings. Build with ``Settings.from_env()`` in production."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    schema_max_tokens: int = 2000
    coaching_max_tokens: int = 1000
    timeout_seconds: float = 60.0
    log_level: str = "INFO"
    log_format: Optional[str] = None
    environment: str = "development"
    otlp_endpoint: Optional[str] = None

    @property
    def provider_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.otlp_endpoint) and self.otlp_endpoint != "disabled"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings from environment variables.

        ``ANTHROPIC_API_KEY`` takes precedence over ``CLAUDE_SQL_API_KEY``.

        Raises:
            ConfigurationError: A numeric variable does not parse
        """
        return cls(
            api_key=os.getenv("ANTHROPIC_API_KEY") or os.getenv("CLAUDE_SQL_API_KEY"),
            model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
            api_url=os.getenv("ANTHROPIC_API_URL", DEFAULT_API_URL),
            api_version=os.getenv("ANTHROPIC_VERSION", DEFAULT_API_VERSION),
            schema_max_tokens=env_number("SCHEMA_MAX_TOKENS", 2000, int),
            coaching_max_tokens=env_number("COACHING_MAX_TOKENS", 1000, int),
            timeout_seconds=env_number("PROVIDER_TIMEOUT_SECONDS", 60.0, float),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT") or None,
            environment=os.getenv("ENVIRONMENT", "development"),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
        )
