"""
Schema Sanitizer
================

Strips markdown fences and leading prose from generated schema text.
"""

import re

import structlog

# Leading keywords of statements accepted on the schema load path
LOAD_KEYWORDS_RE = re.compile(r"^(CREATE|INSERT|UPDATE|DELETE|DROP|ALTER)", re.IGNORECASE)

_SQL_FENCE_RE = re.compile(r"```sql\s*", re.IGNORECASE)
_BARE_FENCE_RE = re.compile(r"```\s*")

logger = structlog.get_logger(__name__)


def strip_fences(text: str) -> str:
    """Remove ```sql / ``` markers and surrounding whitespace."""
    text = _SQL_FENCE_RE.sub("", text)
    text = _BARE_FENCE_RE.sub("", text)
    return text.strip()


def is_sql_start(line: str) -> bool:
    """True when a stripped line opens the SQL region."""
    return bool(LOAD_KEYWORDS_RE.match(line)) or line.startswith("--")


def sanitize_schema(text: str) -> str:
    """
    Return only the SQL portion of generator output.

    Lines before the first statement keyword or ``--`` comment are dropped.
    Once SQL has started every following line is kept, including blank
    lines, on the assumption that prose does not reappear after SQL begins.

    Args:
        text: Raw LLM (or fallback) output

    Returns:
        The SQL text, or an empty string when no SQL keyword is present
    """
    cleaned = strip_fences(text)

    kept: list[str] = []
    in_sql = False
    for line in cleaned.split("\n"):
        stripped = line.strip()
        if not in_sql:
            if not stripped:
                continue
            if not is_sql_start(stripped):
                logger.debug("Skipping non-SQL line", line=stripped[:50])
                continue
            in_sql = True
        kept.append(line)

    result = "\n".join(kept).strip()
    logger.debug(
        "Sanitized schema",
        original_length=len(text),
        cleaned_length=len(result),
    )
    return result
