"""
Schema Generation
=================

Asks the provider for a SQLite schema with sample data, falling back to a
fixed two-table schema when the provider is unavailable.
"""

from typing import Optional

import structlog

from sql_playground.exceptions import ProviderError, ProviderNotConfiguredError
from sql_playground.llm.base import LLMInterface
from sql_playground.models import GenerationRequest, GenerationResult, GenerationSource

logger = structlog.get_logger(__name__)


FALLBACK_SCHEMA_TEMPLATE = """-- Fallback SQL Schema for: {prompt}
-- Note: This is a simplified schema created when the AI service is unavailable

CREATE TABLE customers (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  email TEXT UNIQUE NOT NULL,
  created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE orders (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  customer_id INTEGER NOT NULL,
  total DECIMAL(10,2) NOT NULL,
  status TEXT DEFAULT 'pending',
  created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (customer_id) REFERENCES customers(id)
);

-- Sample data
INSERT INTO customers (id, name, email) VALUES
(1, 'John Smith', 'john@example.com'),
(2, 'Emma Johnson', 'emma@example.com'),
(3, 'Michael Brown', 'michael@example.com');

INSERT INTO orders (id, customer_id, total, status) VALUES
(1001, 1, 129.99, 'completed'),
(1002, 1, 249.95, 'completed'),
(1003, 2, 67.50, 'processing'),
(1004, 3, 89.99, 'processing'),
(1005, 2, 67.50, 'completed');"""


def fallback_schema(prompt: str) -> str:
    """The fixed customers/orders schema, labelled with the prompt."""
    # the prompt lands in a line comment, so it must stay on one line
    label = " ".join(prompt.split()) or "default"
    return FALLBACK_SCHEMA_TEMPLATE.format(prompt=label)


class SchemaGenerator:
    """
    Generates SQLite schemas from natural-language descriptions.

    Never raises for provider problems: missing credentials, HTTP errors and
    malformed responses all produce the fallback schema tagged with the
    reason.
    """

    PROMPT_TEMPLATE = """Generate a complete SQL schema based on this description: "{prompt}".

Please include:
1. CREATE TABLE statements with appropriate data types (use SQLite syntax - INTEGER, TEXT, REAL, BLOB)
2. Primary keys using INTEGER PRIMARY KEY AUTOINCREMENT
3. Foreign keys and constraints where appropriate
4. Sample INSERT statements with realistic data (5-10 rows per table)
5. Comments explaining the schema design

Make sure the schema is production-ready with proper normalization and relationships.
Format the output as clean, executable SQLite SQL.
Use SQLite-compatible syntax only."""

    def __init__(self, llm: Optional[LLMInterface] = None, max_tokens: int = 2000) -> None:
        """
        Args:
            llm: Provider client; None means no credential is configured
            max_tokens: Token budget for the generated schema
        """
        self.llm = llm
        self.max_tokens = max_tokens

    def build_prompt(self, prompt: str) -> str:
        return self.PROMPT_TEMPLATE.format(prompt=prompt)

    def _fallback(self, request: GenerationRequest, note: str) -> GenerationResult:
        return GenerationResult(
            text=fallback_schema(request.prompt),
            source=GenerationSource.FALLBACK,
            error_note=note,
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Produce schema text for the request.

        Args:
            request: The user's description

        Returns:
            GenerationResult from the provider, or the fallback schema
        """
        if self.llm is None:
            logger.warning("Provider not configured, using fallback schema")
            return self._fallback(request, ProviderNotConfiguredError().message)

        try:
            response = await self.llm.generate(
                self.build_prompt(request.prompt), max_tokens=self.max_tokens
            )
        except ProviderNotConfiguredError as e:
            logger.warning("Provider not configured, using fallback schema")
            return self._fallback(request, e.message)
        except ProviderError as e:
            logger.error("Schema generation failed, using fallback", error=e.message)
            return self._fallback(request, f"API call failed: {e.message}")

        logger.info(
            "Schema generated",
            model=response.model,
            length=len(response.content),
            tokens=response.tokens_used,
        )
        return GenerationResult(text=response.content, source=GenerationSource.LLM)
