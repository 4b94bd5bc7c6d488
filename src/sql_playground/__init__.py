"""
AI SQL Playground
=================

Generate practice databases with Claude, load them into SQLite, run queries
and get coaching when a query fails.
"""

from sql_playground.coaching import SQLCoach, parse_coaching_text
from sql_playground.config import Settings
from sql_playground.exceptions import (
    ConfigurationError,
    InvalidProviderResponse,
    PlaygroundError,
    ProviderError,
    ProviderHTTPError,
    ProviderNotConfiguredError,
)
from sql_playground.generation import SchemaGenerator, fallback_schema
from sql_playground.llm import AnthropicLLM, LLMInterface, MockLLM
from sql_playground.models import (
    CoachingOutcome,
    CoachingRequest,
    CoachingResult,
    ErrorLocation,
    GenerationRequest,
    GenerationResult,
    GenerationSource,
    LoadReport,
    LoadSummary,
    QueryReport,
    ResultSet,
    StatementOutcome,
    StatementStatus,
    TableInfo,
)
from sql_playground.playground import Playground
from sql_playground.session import DatabaseSession
from sql_playground.sql import locate_error, sanitize_schema, split_statements

__version__ = "0.1.0"

__all__ = [
    # Models
    "CoachingOutcome",
    "CoachingRequest",
    "CoachingResult",
    "ErrorLocation",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSource",
    "LoadReport",
    "LoadSummary",
    "QueryReport",
    "ResultSet",
    "StatementOutcome",
    "StatementStatus",
    "TableInfo",
    # Errors
    "PlaygroundError",
    "ProviderError",
    "ProviderHTTPError",
    "ProviderNotConfiguredError",
    "InvalidProviderResponse",
    "ConfigurationError",
    # Components
    "Settings",
    "SchemaGenerator",
    "fallback_schema",
    "SQLCoach",
    "parse_coaching_text",
    "DatabaseSession",
    "Playground",
    "sanitize_schema",
    "split_statements",
    "locate_error",
    # LLM
    "AnthropicLLM",
    "LLMInterface",
    "MockLLM",
]
