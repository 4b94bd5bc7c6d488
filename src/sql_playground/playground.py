"""
SQL Playground
==============

Composes generation, loading, querying and coaching around one session.
"""

import sqlite3
import time
from datetime import datetime, timezone
from typing import Optional

import structlog

from sql_playground.coaching import SQLCoach
from sql_playground.generation import SchemaGenerator
from sql_playground.models import (
    CoachingOutcome,
    CoachingRequest,
    DebugEntry,
    ErrorLocation,
    GenerationRequest,
    GenerationResult,
    LoadReport,
    QueryReport,
    StatementStatus,
    TableInfo,
)
from sql_playground.session import DatabaseSession
from sql_playground.sql.locator import locate_error
from sql_playground.sql.sanitizer import sanitize_schema
from sql_playground.sql.splitter import split_statements

logger = structlog.get_logger(__name__)


class Playground:
    """
    The practice environment a user works in.

    The playground:
    1. Generates a schema from a description (or falls back)
    2. Sanitizes and splits it into statements
    3. Resets the session and applies every statement
    4. Runs ad hoc queries and locates errors
    5. Forwards failures to the coach on request
    6. Keeps a debug trail of the last action
    """

    MAX_DEBUG_ENTRIES = 500

    def __init__(
        self,
        generator: SchemaGenerator,
        coach: SQLCoach,
        session: Optional[DatabaseSession] = None,
    ) -> None:
        self.generator = generator
        self.coach = coach
        self.session = session or DatabaseSession()
        self.debug_trail: list[DebugEntry] = []

    def _debug(self, message: str) -> None:
        """Add entry to the debug trail."""
        self.debug_trail.append(
            DebugEntry(timestamp=datetime.now(timezone.utc).isoformat(), message=message)
        )
        if len(self.debug_trail) > self.MAX_DEBUG_ENTRIES:
            del self.debug_trail[: -self.MAX_DEBUG_ENTRIES]

    async def generate_schema(self, prompt: str) -> GenerationResult:
        """Ask the generator for schema text."""
        self.debug_trail = []
        self._debug(f"Starting schema generation for: {prompt}")
        result = await self.generator.generate(GenerationRequest(prompt=prompt))
        self._debug(f"Schema received. Source: {result.source.value}")
        if result.error_note:
            self._debug(f"API Error: {result.error_note}")
        return result

    def load_schema(self, schema_text: str) -> LoadReport:
        """
        Replace the session's tables with the given schema.

        Args:
            schema_text: Raw generator output or hand-written SQL

        Returns:
            LoadReport with per-statement outcomes and the resulting tables
        """
        self.debug_trail = []
        self._debug("Loading schema into database...")

        sanitized = sanitize_schema(schema_text)
        self._debug(
            f"Original schema length: {len(schema_text)}, Cleaned length: {len(sanitized)}"
        )

        dropped = self.session.reset()
        for name in dropped:
            self._debug(f"Dropped table: {name}")

        statements = split_statements(sanitized)
        self._debug(f"Parsed {len(statements)} SQL statements from schema")

        summary = self.session.load(statements)
        total = len(statements)
        for outcome in summary.outcomes:
            if outcome.status == StatementStatus.APPLIED:
                self._debug(f"✓ Statement {outcome.index}/{total} executed successfully")
            else:
                self._debug(f"✗ Error executing statement {outcome.index}/{total}: {outcome.reason}")
                self._debug(f"Failed statement: {outcome.statement}")
        self._debug(
            f"Schema loading completed: {summary.applied} statements succeeded, "
            f"{summary.failed} failed"
        )

        tables = self.session.list_tables()
        for table in tables:
            self._debug(f"Table {table.name} is queryable with {table.row_count} rows")

        if tables:
            status = f"Database loaded with {len(tables)} tables. Ready for queries!"
        else:
            status = "Failed to create any tables. Check your SQL syntax."

        logger.info(
            "Schema loaded",
            statements=total,
            applied=summary.applied,
            failed=summary.failed,
            tables=len(tables),
        )

        return LoadReport(
            sanitized_sql=sanitized,
            statements=statements,
            summary=summary,
            tables=tables,
            dropped_tables=dropped,
            status_message=status,
            debug_trail=list(self.debug_trail),
        )

    def run_query(self, sql: str) -> QueryReport:
        """
        Execute a user query, capturing engine errors instead of raising.

        Args:
            sql: One or more SQL statements

        Returns:
            QueryReport with result sets, or the verbatim error and its location
        """
        self._debug(f"Executing query: {sql}")
        start_time = time.perf_counter()

        try:
            results = self.session.query(sql)
        except sqlite3.Error as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            message = str(e)
            self._debug(f"Query error: {message}")
            logger.info("Query failed", error=message)
            return QueryReport(
                query=sql,
                results=[],
                execution_time_ms=elapsed_ms,
                error=message,
                location=locate_error(message, sql),
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        rows = sum(len(r.rows) for r in results)
        self._debug(f"Query executed in {elapsed_ms:.0f}ms ({rows} rows)")
        return QueryReport(
            query=sql,
            results=results,
            execution_time_ms=elapsed_ms,
            location=ErrorLocation(),
        )

    async def explain_error(self, schema: str, query: str, error: str) -> CoachingOutcome:
        """Get coaching for a failed query."""
        self._debug("Requesting coaching for failed query")
        outcome = await self.coach.explain(CoachingRequest(schema=schema, query=query, error=error))
        self._debug(f"Coaching received. Source: {outcome.source.value}")
        return outcome

    def tables(self) -> list[TableInfo]:
        return self.session.list_tables()

    def reset(self) -> list[str]:
        dropped = self.session.reset()
        self._debug(f"Reset database, dropped {len(dropped)} tables")
        return dropped

    def close(self) -> None:
        self.session.close()
