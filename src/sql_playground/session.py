"""
Database Session
================

Owns the SQLite engine instance that schemas are loaded into and queries
run against.
"""

import sqlite3
from typing import Iterable, Optional

import structlog

from sql_playground.models import (
    ColumnInfo,
    LoadSummary,
    ResultSet,
    StatementOutcome,
    StatementStatus,
    TableInfo,
)
from sql_playground.sql.splitter import iter_statements

# SQLite reserves this prefix for its own tables
RESERVED_PREFIX = "sqlite_"

_USER_TABLES_SQL = (
    "SELECT name FROM sqlite_master "
    f"WHERE type='table' AND name NOT LIKE '{RESERVED_PREFIX}%' ORDER BY rowid"
)

logger = structlog.get_logger(__name__)


def quote_identifier(name: str) -> str:
    """Quote a table name for interpolation into SQL."""
    return '"' + name.replace('"', '""') + '"'


class DatabaseSession:
    """
    A single live SQLite database.

    The connection runs in autocommit mode so every statement is applied as
    soon as it executes. Loading a schema is a full reset, never a merge.
    """

    def __init__(self, database: str = ":memory:") -> None:
        """
        Open the session.

        Args:
            database: SQLite database path (in-memory by default)
        """
        self.database = database
        self._conn: Optional[sqlite3.Connection] = sqlite3.connect(
            database,
            isolation_level=None,
            check_same_thread=False,
        )

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Database session is closed")
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "DatabaseSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def table_names(self) -> list[str]:
        """Names of all user tables, in creation order."""
        return [row[0] for row in self.connection.execute(_USER_TABLES_SQL)]

    def reset(self) -> list[str]:
        """
        Drop every user table.

        Returns:
            Names of the dropped tables
        """
        dropped = []
        for name in self.table_names():
            self.connection.execute(f"DROP TABLE IF EXISTS {quote_identifier(name)}")
            dropped.append(name)
            logger.debug("Dropped table", table=name)
        return dropped

    def load(self, statements: Iterable[str]) -> LoadSummary:
        """
        Apply statements one at a time, in order.

        A failing statement is recorded and the next one still runs; nothing
        is retried.

        Args:
            statements: Complete SQL statements

        Returns:
            LoadSummary with one outcome per statement
        """
        summary = LoadSummary()
        for index, statement in enumerate(statements, start=1):
            statement = statement.strip()
            if not statement:
                continue
            try:
                self.connection.execute(statement)
            except sqlite3.Error as e:
                summary.outcomes.append(
                    StatementOutcome(
                        index=index,
                        statement=statement,
                        status=StatementStatus.FAILED,
                        reason=str(e),
                    )
                )
                logger.warning("Statement failed", index=index, error=str(e))
            else:
                summary.outcomes.append(
                    StatementOutcome(
                        index=index,
                        statement=statement,
                        status=StatementStatus.APPLIED,
                    )
                )

        logger.info("Statements applied", applied=summary.applied, failed=summary.failed)
        return summary

    def query(self, sql: str) -> list[ResultSet]:
        """
        Run arbitrary SQL and collect what it returns.

        Several statements may be given; each one that produces columns
        contributes a result set. Engine errors propagate unchanged.

        Args:
            sql: One or more SQL statements

        Returns:
            Result sets in statement order

        Raises:
            sqlite3.Error: Whatever the engine raises
        """
        results = []
        for statement in iter_statements(sql):
            cursor = self.connection.execute(statement)
            if cursor.description is not None:
                columns = [d[0] for d in cursor.description]
                results.append(ResultSet(columns=columns, rows=cursor.fetchall()))
            cursor.close()
        return results

    def list_tables(self) -> list[TableInfo]:
        """Describe every user table with its columns and live row count."""
        tables = []
        for name in self.table_names():
            quoted = quote_identifier(name)
            columns = [
                ColumnInfo(
                    name=row[1],
                    type=row[2],
                    not_null=bool(row[3]),
                    primary_key=bool(row[5]),
                )
                for row in self.connection.execute(f"PRAGMA table_info({quoted})")
            ]
            row_count = self.connection.execute(f"SELECT COUNT(*) FROM {quoted}").fetchone()[0]
            tables.append(TableInfo(name=name, columns=columns, row_count=row_count))
        return tables
