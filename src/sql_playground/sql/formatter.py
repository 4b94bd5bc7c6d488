"""
SQL Formatter
=============

Keyword line-breaking for the editor's Format action.
"""

import re

CLAUSE_KEYWORDS = [
    "LEFT JOIN",
    "RIGHT JOIN",
    "INNER JOIN",
    "ORDER BY",
    "GROUP BY",
    "SELECT",
    "FROM",
    "WHERE",
    "JOIN",
    "HAVING",
    "LIMIT",
    "INSERT",
    "VALUES",
    "UPDATE",
    "DELETE",
    "CREATE",
    "DROP",
    "ALTER",
]

# String literals are matched first so their contents are left alone
_TOKEN_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"[^"]*"'
    r"|\b(" + "|".join(k.replace(" ", r"\s+") for k in CLAUSE_KEYWORDS) + r")\b"
    r"|,\s*",
    re.IGNORECASE,
)


def format_sql(sql: str) -> str:
    """Put each clause on its own line and each list item after a comma."""
    collapsed = re.sub(r"\s+", " ", sql).strip()

    def _replace(match: re.Match) -> str:
        text = match.group(0)
        if match.group(1):
            return "\n" + re.sub(r"\s+", " ", text.upper())
        if text.startswith(","):
            return ",\n  "
        return text

    formatted = _TOKEN_RE.sub(_replace, collapsed)
    lines = [line.rstrip() for line in formatted.split("\n")]
    return "\n".join(line for line in lines if line.strip()).strip()
