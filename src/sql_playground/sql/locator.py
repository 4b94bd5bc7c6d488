"""
Error Locator
=============

Maps a SQLite error message back to a position in the query text.
"""

import re
from typing import Optional

from sql_playground.models import ErrorLocation

# Checked in order; the first match wins
ERROR_TOKEN_PATTERNS: list[re.Pattern] = [
    re.compile(r'near "([^"]+)"'),
    re.compile(r"no such table:\s*(\S+)", re.IGNORECASE),
    re.compile(r"no such column:\s*(\S+)", re.IGNORECASE),
    re.compile(r"has no column named\s+(\S+)", re.IGNORECASE),
    re.compile(r"ambiguous column name:\s*(\S+)", re.IGNORECASE),
]


def extract_error_token(message: str) -> Optional[str]:
    """Return the offending token named in an error message, if any."""
    for pattern in ERROR_TOKEN_PATTERNS:
        match = pattern.search(message)
        if match:
            token = match.group(1).strip("\"'`")
            if token:
                return token
    return None


def locate_error(message: str, query: str) -> ErrorLocation:
    """
    Find the first query line that mentions the token from an error.

    The search is a case-insensitive substring match. This is advisory
    only: when nothing is found every field of the location is None.

    Args:
        message: Error text reported by the database engine
        query: The query text that produced the error

    Returns:
        ErrorLocation with 1-based line and column
    """
    token = extract_error_token(message or "")
    if not token or not query:
        return ErrorLocation()

    needle = token.lower()
    for number, line in enumerate(query.split("\n"), start=1):
        index = line.lower().find(needle)
        if index >= 0:
            return ErrorLocation(line=number, column=index + 1, context_line=line)

    return ErrorLocation()
