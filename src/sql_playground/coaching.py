"""
SQL Coaching
============

Explains failed queries in plain English. Provider output is parsed as JSON
when it looks like JSON; anything else becomes the explanation verbatim.
"""

import json
from typing import Optional

import structlog

from sql_playground.exceptions import ProviderError, ProviderNotConfiguredError
from sql_playground.llm.base import LLMInterface
from sql_playground.models import (
    CoachingOutcome,
    CoachingRequest,
    CoachingResult,
    GenerationSource,
)
from sql_playground.sql.locator import extract_error_token, locate_error

logger = structlog.get_logger(__name__)


# (substring of the lower-cased error, hints shown for it)
FALLBACK_HINTS: list[tuple[str, list[str]]] = [
    (
        "no such table",
        [
            "Check the table name against the CREATE TABLE statements in the schema.",
            "Table names are case-insensitive but must be spelled exactly.",
        ],
    ),
    (
        "no such column",
        [
            "Check the column name against the table definition.",
            "If you used an alias, make sure it is defined in the FROM clause.",
        ],
    ),
    (
        "syntax error",
        [
            "Look for a misspelled keyword or a missing comma near the highlighted text.",
            "Make sure every opening parenthesis and quote is closed.",
        ],
    ),
    (
        "ambiguous column",
        ["Prefix the column with its table name or alias, e.g. customers.id."],
    ),
    (
        "constraint failed",
        [
            "The statement breaks a NOT NULL, UNIQUE, CHECK or FOREIGN KEY rule.",
            "Compare the values you insert with the constraints in the schema.",
        ],
    ),
]

GENERIC_HINTS = [
    "Read the error message carefully; it usually names the problem token.",
    "Compare your query with the schema to confirm table and column names.",
]


def parse_coaching_text(text: str) -> CoachingResult:
    """
    Turn provider output into a CoachingResult without ever raising.

    Text starting with ``{`` is parsed as a JSON object with
    ``explanation``, ``suggested_fix`` (or ``suggestedFix``) and ``hints``.
    Anything else, or JSON that fails to parse, becomes the explanation.
    """
    raw = (text or "").strip()
    if raw.startswith("{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None

        if isinstance(data, dict):
            explanation = data.get("explanation")
            fix = data.get("suggested_fix", data.get("suggestedFix"))
            hints = data.get("hints") or []
            if not isinstance(hints, list):
                hints = [hints]
            return CoachingResult(
                explanation=str(explanation) if explanation else raw,
                suggested_fix=str(fix) if fix else None,
                hints=[str(h) for h in hints if h],
            )

    return CoachingResult(explanation=raw, suggested_fix=None, hints=[])


def fallback_coaching(request: CoachingRequest) -> CoachingResult:
    """Templated coaching built from the error text alone."""
    error_lower = request.error.lower()
    hints = next(
        (list(h) for key, h in FALLBACK_HINTS if key in error_lower),
        list(GENERIC_HINTS),
    )

    explanation = f'The database rejected your query with the error: "{request.error}".'
    token = extract_error_token(request.error)
    if token:
        explanation += f' The problem is related to "{token}".'

    location = locate_error(request.error, request.query)
    if location.found:
        hints.insert(
            0,
            f"Look at line {location.line}, column {location.column}: "
            f"{location.context_line.strip()}",
        )

    return CoachingResult(explanation=explanation, suggested_fix=None, hints=hints)


class SQLCoach:
    """
    Produces coaching for failed queries.

    Provider problems never reach the caller; they yield the templated
    fallback tagged with the reason.
    """

    PROMPT_TEMPLATE = """You are a friendly SQL tutor helping a student who is practicing SQLite.

The student is working with this database schema:
{schema}

They ran this query:
{query}

SQLite returned this error:
{error}

Explain in plain English what went wrong and how to fix it. Reply with only a
JSON object with these keys:
- "explanation": a short explanation of the error for a beginner
- "suggested_fix": the complete corrected query
- "hints": a list of short tips for avoiding this mistake"""

    def __init__(self, llm: Optional[LLMInterface] = None, max_tokens: int = 1000) -> None:
        """
        Args:
            llm: Provider client; None means no credential is configured
            max_tokens: Token budget for the coaching reply
        """
        self.llm = llm
        self.max_tokens = max_tokens

    def build_prompt(self, request: CoachingRequest) -> str:
        return self.PROMPT_TEMPLATE.format(
            schema=request.schema,
            query=request.query,
            error=request.error,
        )

    def _fallback(self, request: CoachingRequest, note: str) -> CoachingOutcome:
        return CoachingOutcome(
            result=fallback_coaching(request),
            source=GenerationSource.FALLBACK,
            error_note=note,
        )

    async def explain(self, request: CoachingRequest) -> CoachingOutcome:
        """
        Explain why the query failed.

        Args:
            request: Schema, query and error text

        Returns:
            CoachingOutcome from the provider, or the templated fallback
        """
        if self.llm is None:
            logger.warning("Provider not configured, using fallback coaching")
            return self._fallback(request, ProviderNotConfiguredError().message)

        try:
            response = await self.llm.generate(
                self.build_prompt(request), max_tokens=self.max_tokens
            )
        except ProviderNotConfiguredError as e:
            return self._fallback(request, e.message)
        except ProviderError as e:
            logger.error("Coaching failed, using fallback", error=e.message)
            return self._fallback(request, f"API call failed: {e.message}")

        logger.info("Coaching generated", model=response.model, tokens=response.tokens_used)
        return CoachingOutcome(
            result=parse_coaching_text(response.content),
            source=GenerationSource.LLM,
        )
