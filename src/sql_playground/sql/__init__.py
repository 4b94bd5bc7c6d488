"""
SQL Text Processing
===================

Sanitizing, splitting, formatting and error location for SQL text.
"""

from sql_playground.sql.formatter import format_sql
from sql_playground.sql.locator import extract_error_token, locate_error
from sql_playground.sql.sanitizer import sanitize_schema, strip_fences
from sql_playground.sql.splitter import (
    iter_statements,
    scan_statements,
    split_statements,
    strip_comments,
)

__all__ = [
    "format_sql",
    "extract_error_token",
    "locate_error",
    "sanitize_schema",
    "strip_fences",
    "iter_statements",
    "scan_statements",
    "split_statements",
    "strip_comments",
]
