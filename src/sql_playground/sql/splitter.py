"""
Statement Splitter
==================

Turns sanitized schema text into individually executable statements.

Two limitations are kept on purpose for compatibility with schemas that
already load today:

- comments are removed with plain regexes before scanning, so ``--`` or
  ``/*`` inside a string literal is stripped too;
- a quote preceded by a backslash does not toggle the quote state, which is
  not real SQL escaping (SQLite doubles quotes instead).
"""

import re
import sqlite3
from typing import Iterator

from sql_playground.sql.sanitizer import LOAD_KEYWORDS_RE

_LINE_COMMENT_RE = re.compile(r"--.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_DASHES_ONLY_RE = re.compile(r"^-+\s*$")


def strip_comments(sql: str) -> str:
    """Remove line and block comments without regard to string literals."""
    sql = _LINE_COMMENT_RE.sub("", sql)
    sql = _BLOCK_COMMENT_RE.sub("", sql)
    return sql.strip()


def scan_statements(sql: str) -> list[str]:
    """
    Split text at top-level semicolons.

    A semicolon ends a statement only outside single quotes, double quotes
    and parentheses. A trailing statement without a semicolon gets one.
    """
    statements: list[str] = []
    current: list[str] = []
    depth = 0
    in_single = False
    in_double = False
    prev = ""

    for char in sql:
        if char == "'" and prev != "\\" and not in_double:
            in_single = not in_single
        elif char == '"' and prev != "\\" and not in_single:
            in_double = not in_double

        if not in_single and not in_double:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1

        current.append(char)

        if char == ";" and not in_single and not in_double and depth == 0:
            statement = "".join(current).strip()
            if statement:
                statements.append(statement)
            current = []

        prev = char

    remainder = "".join(current).strip()
    if remainder:
        statements.append(remainder if remainder.endswith(";") else remainder + ";")

    return statements


def is_loadable(statement: str) -> bool:
    """True for statements the schema load path executes."""
    cleaned = statement.strip()
    return (
        bool(cleaned)
        and not _DASHES_ONLY_RE.match(cleaned)
        and bool(LOAD_KEYWORDS_RE.match(cleaned))
    )


def split_statements(sql: str) -> list[str]:
    """
    Split sanitized schema SQL into loadable statements.

    Only statements beginning with CREATE, INSERT, UPDATE, DELETE, DROP or
    ALTER are returned; SELECT, PRAGMA, BEGIN and comment fragments are
    dropped because this path only loads schemas.

    Args:
        sql: Sanitized SQL text

    Returns:
        Ordered list of semicolon-terminated statements
    """
    return [s for s in scan_statements(strip_comments(sql)) if is_loadable(s)]


def iter_statements(sql: str) -> Iterator[str]:
    """
    Yield complete statements from ad hoc query text.

    Uses SQLite's own tokenizer to decide completeness, so quotes, comments
    and trigger bodies are honored. No statements are filtered out.
    """
    buffer = ""
    for char in sql:
        buffer += char
        if char == ";" and sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            if strip_comments(statement):
                yield statement
            buffer = ""

    # comment-only fragments are not statements
    tail = buffer.strip()
    if strip_comments(tail):
        yield tail
