"""
Claude Provider
===============

Client for the Anthropic messages API.
"""

import httpx
import structlog
from opentelemetry import trace

from sql_playground.config import Settings
from sql_playground.exceptions import (
    InvalidProviderResponse,
    ProviderError,
    ProviderHTTPError,
    ProviderNotConfiguredError,
)
from sql_playground.llm.base import LLMInterface
from sql_playground.models import LLMResponse

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class AnthropicLLM(LLMInterface):
    """
    Calls Claude through the messages endpoint with a single user message.

    No retries are made; the token budget is the only size limit.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            settings: Provider credentials, model and endpoint
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.settings = settings
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.settings.api_key or "",
            "anthropic-version": self.settings.api_version,
        }

    def _payload(self, prompt: str, max_tokens: int) -> dict:
        return {
            "model": self.settings.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    @staticmethod
    def _extract_text(data: object) -> str:
        """Pull ``content[0].text`` out of a messages API response."""
        if not isinstance(data, dict):
            raise InvalidProviderResponse()
        content = data.get("content")
        if not isinstance(content, list) or not content:
            raise InvalidProviderResponse()
        first = content[0]
        text = first.get("text") if isinstance(first, dict) else None
        if not isinstance(text, str) or not text:
            raise InvalidProviderResponse()
        return text

    @staticmethod
    def _token_usage(data: dict) -> int:
        """Sum input and output tokens from the optional ``usage`` block."""
        usage = data.get("usage") or {}
        if not isinstance(usage, dict):
            raise InvalidProviderResponse()
        try:
            return int(usage.get("input_tokens", 0)) + int(usage.get("output_tokens", 0))
        except (TypeError, ValueError) as e:
            raise InvalidProviderResponse() from e

    async def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        """
        Send the prompt to Claude and return the first content block's text.

        Raises:
            ProviderNotConfiguredError: No API key is set
            ProviderHTTPError: Non-2xx status from the provider
            InvalidProviderResponse: Body is not JSON or lacks content text
            ProviderError: Transport-level failure
        """
        if not self.settings.provider_configured:
            raise ProviderNotConfiguredError()

        budget = max_tokens or self.settings.schema_max_tokens

        with tracer.start_as_current_span("claude.messages") as span:
            span.set_attribute("llm.model", self.settings.model)
            span.set_attribute("llm.max_tokens", budget)

            try:
                async with httpx.AsyncClient(
                    timeout=self.settings.timeout_seconds,
                    transport=self.transport,
                ) as client:
                    response = await client.post(
                        self.settings.api_url,
                        headers=self._headers(),
                        json=self._payload(prompt, budget),
                    )
            except httpx.HTTPError as e:
                span.set_attribute("error", True)
                raise ProviderError(f"Request to Claude API failed: {e}") from e

            span.set_attribute("http.status_code", response.status_code)
            logger.info("Claude API response", status=response.status_code)

            if not response.is_success:
                logger.error(
                    "Claude API error",
                    status=response.status_code,
                    body=response.text[:500],
                )
                raise ProviderHTTPError(response.status_code, response.text)

            try:
                data = response.json()
            except ValueError as e:
                raise InvalidProviderResponse() from e

            text = self._extract_text(data)
            tokens = self._token_usage(data)

            return LLMResponse(
                content=text,
                model=data.get("model", self.settings.model),
                tokens_used=tokens,
            )
