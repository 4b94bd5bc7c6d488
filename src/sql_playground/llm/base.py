"""
Base LLM Interface
==================

Abstract interface for text-generation providers.
"""

from abc import ABC, abstractmethod

from sql_playground.models import LLMResponse


class LLMInterface(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    async def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        """
        Generate a response from the LLM.

        Args:
            prompt: The single user message sent to the provider
            max_tokens: Token budget for the reply (provider default if None)

        Returns:
            LLMResponse with generated content

        Raises:
            ProviderError: When no usable response could be obtained
        """
        pass
