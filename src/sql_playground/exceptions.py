"""
Exceptions
==========

Errors raised by the provider clients. The generation and coaching clients
catch every ``ProviderError`` and degrade to their fallback payloads.
"""

from typing import Optional


class PlaygroundError(Exception):
    """Base exception for the SQL playground."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProviderError(PlaygroundError):
    """The text-generation provider could not produce a usable response."""


class ProviderNotConfiguredError(ProviderError):
    """No API key is configured for the provider."""

    def __init__(self) -> None:
        super().__init__("Claude API key not configured")


class ProviderHTTPError(ProviderError):
    """The provider answered with a non-success HTTP status."""

    STATUS_MESSAGES = {
        401: "Authentication failed - API key may be invalid",
        429: "Rate limit exceeded - please try again later",
        500: "Claude API service error",
    }

    def __init__(self, status_code: int, body: str = "") -> None:
        message = self.STATUS_MESSAGES.get(
            status_code, f"API error ({status_code}): {body}"
        )
        super().__init__(message, {"status_code": status_code, "body": body})
        self.status_code = status_code


class InvalidProviderResponse(ProviderError):
    """The provider's response body did not have the expected structure."""

    def __init__(self, message: str = "Invalid response structure from Claude API") -> None:
        super().__init__(message)


class ConfigurationError(PlaygroundError):
    """An environment variable holds a value the service cannot use."""

    def __init__(self, variable: str, value: str, expected: str) -> None:
        super().__init__(
            f"{variable} must be {expected}, got {value!r}",
            {"variable": variable, "value": value},
        )
        self.variable = variable
