"""
Data Models
===========

Core data structures for schema generation, loading, querying and coaching.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class GenerationSource(Enum):
    """Where a generated payload came from."""

    LLM = "claude-api"
    FALLBACK = "fallback"


class StatementStatus(Enum):
    """Outcome of applying a single statement."""

    APPLIED = "applied"
    FAILED = "failed"


@dataclass
class LLMResponse:
    """Response from an LLM call."""

    content: str
    model: str
    tokens_used: int = 0


@dataclass
class GenerationRequest:
    """A user's natural-language description of the database they want."""

    prompt: str


@dataclass
class GenerationResult:
    """Raw schema text plus where it came from."""

    text: str
    source: GenerationSource
    error_note: Optional[str] = None


@dataclass
class StatementOutcome:
    """Result of applying one statement during a schema load."""

    index: int
    statement: str
    status: StatementStatus
    reason: Optional[str] = None


@dataclass
class LoadSummary:
    """Aggregate of every statement applied during a load."""

    outcomes: list[StatementOutcome] = field(default_factory=list)

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.status == StatementStatus.APPLIED)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == StatementStatus.FAILED)


@dataclass
class ResultSet:
    """Columns and rows produced by one row-returning statement."""

    columns: list[str]
    rows: list[tuple[Any, ...]]


@dataclass
class ColumnInfo:
    name: str
    type: str
    not_null: bool = False
    primary_key: bool = False


@dataclass
class TableInfo:
    """A live table in the session, with its current row count."""

    name: str
    columns: list[ColumnInfo]
    row_count: int


@dataclass
class ErrorLocation:
    """Best-effort position of an error inside the query text (1-based)."""

    line: Optional[int] = None
    column: Optional[int] = None
    context_line: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.line is not None


@dataclass
class CoachingRequest:
    """A failed query with the schema and error it failed against."""

    schema: str
    query: str
    error: str


@dataclass
class CoachingResult:
    """Plain-English remediation for a failed query."""

    explanation: str
    suggested_fix: Optional[str] = None
    hints: list[str] = field(default_factory=list)


@dataclass
class CoachingOutcome:
    """Coaching result tagged with its source."""

    result: CoachingResult
    source: GenerationSource
    error_note: Optional[str] = None


@dataclass
class DebugEntry:
    """Single entry in the debug trail."""

    timestamp: str
    message: str


@dataclass
class LoadReport:
    """Everything a schema load produced."""

    sanitized_sql: str
    statements: list[str]
    summary: LoadSummary
    tables: list[TableInfo]
    dropped_tables: list[str]
    status_message: str
    debug_trail: list[DebugEntry]

    @property
    def success(self) -> bool:
        return len(self.tables) > 0


@dataclass
class QueryReport:
    """Results of an ad hoc query, or the error it raised."""

    query: str
    results: list[ResultSet]
    execution_time_ms: float
    error: Optional[str] = None
    location: ErrorLocation = field(default_factory=ErrorLocation)

    @property
    def success(self) -> bool:
        return self.error is None
