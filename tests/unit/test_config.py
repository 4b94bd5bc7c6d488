"""
Unit Tests for Settings
=======================

Tests for reading configuration from the environment.
"""

import pytest

from sql_playground.config import Settings
from sql_playground.exceptions import ConfigurationError


class TestFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unset variables fall back to defaults."""
        for name in ("SCHEMA_MAX_TOKENS", "COACHING_MAX_TOKENS", "PROVIDER_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.schema_max_tokens == 2000
        assert settings.coaching_max_tokens == 1000
        assert settings.timeout_seconds == 60.0

    def test_numbers_parsed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCHEMA_MAX_TOKENS", "4096")
        monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", " 12.5 ")
        settings = Settings.from_env()
        assert settings.schema_max_tokens == 4096
        assert settings.timeout_seconds == 12.5

    def test_api_key_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that ANTHROPIC_API_KEY wins over the legacy name."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "primary")
        monkeypatch.setenv("CLAUDE_SQL_API_KEY", "legacy")
        assert Settings.from_env().api_key == "primary"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("SCHEMA_MAX_TOKENS", "lots"),
            ("COACHING_MAX_TOKENS", "1.5"),
            ("PROVIDER_TIMEOUT_SECONDS", "soon"),
        ],
    )
    def test_bad_number_names_variable(
        self, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        """Test that a non-numeric value raises an error naming the variable."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()
        assert exc_info.value.variable == name
        assert name in exc_info.value.message
        assert repr(value) in exc_info.value.message
