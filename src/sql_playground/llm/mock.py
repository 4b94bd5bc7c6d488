"""
Mock LLM
========

Mock LLM implementation for testing and demonstration.
"""

from sql_playground.llm.base import LLMInterface
from sql_playground.models import LLMResponse


class MockLLM(LLMInterface):
    """
    Mock LLM that answers from canned responses.

    Used in tests and local demos in place of the Claude provider.
    """

    def __init__(
        self,
        responses: dict[str, list[str]] | None = None,
        default: str = "",
        error: Exception | None = None,
    ) -> None:
        """
        Initialize with canned responses.

        Args:
            responses: Dict mapping prompt substrings to lists of replies.
                       Each reply is returned in sequence.
            default: Reply used when no key matches the prompt
            error: Exception raised on every call instead of replying
        """
        self.responses = responses or {}
        self.default = default
        self.error = error
        self.call_counts: dict[str, int] = {}
        self.prompts: list[str] = []

    async def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        """Return the next canned reply whose key appears in the prompt."""
        self.prompts.append(prompt)

        if self.error is not None:
            raise self.error

        for key, replies in self.responses.items():
            if key.lower() in prompt.lower():
                count = self.call_counts.get(key, 0)
                self.call_counts[key] = count + 1
                return LLMResponse(
                    content=replies[min(count, len(replies) - 1)],
                    model="mock-llm-v1",
                )

        return LLMResponse(content=self.default, model="mock-llm-v1")

    def reset(self) -> None:
        """Reset call counts for fresh test runs."""
        self.call_counts = {}
        self.prompts = []
