"""
LLM Module
==========

Pluggable text-generation providers.
"""

from sql_playground.llm.claude import AnthropicLLM
from sql_playground.llm.base import LLMInterface
from sql_playground.llm.mock import MockLLM

__all__ = [
    "AnthropicLLM",
    "LLMInterface",
    "MockLLM",
]
