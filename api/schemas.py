"""
API Schemas
===========

Pydantic models for API request/response validation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SourceEnum(str, Enum):
    """Where a generated payload came from."""

    CLAUDE_API = "claude-api"
    FALLBACK = "fallback"


class GenerateSchemaRequest(BaseModel):
    """Request body for schema generation."""

    prompt: str = Field(
        ...,
        min_length=1,
        description="Natural-language description of the database to generate",
        examples=["retail store"],
    )


class GenerateSchemaResponse(BaseModel):
    """Generated (or fallback) schema text."""

    database: str = Field(..., description="SQL text for the generated database")
    source: SourceEnum = Field(..., description="Payload source")
    error: str | None = Field(None, description="Why the fallback was used")


class ExplainErrorRequest(BaseModel):
    """Request body for query coaching."""

    schema_sql: str = Field(
        ...,
        alias="schema",
        min_length=1,
        description="Schema the query ran against",
    )
    query: str = Field(..., min_length=1, description="The failing query")
    error: str = Field(..., min_length=1, description="Error message from the engine")


class CoachingResponse(BaseModel):
    explanation: str = Field(..., description="Plain-English explanation")
    suggested_fix: str | None = Field(None, description="Corrected query, if any")
    hints: list[str] = Field(default_factory=list, description="Short tips")


class ExplainErrorResponse(BaseModel):
    """Coaching for a failed query."""

    coaching: CoachingResponse
    source: SourceEnum
    error: str | None = Field(None, description="Why the fallback was used")


class LoadSchemaRequest(BaseModel):
    """Request body for loading SQL into the session."""

    database: str = Field(..., min_length=1, description="Raw schema SQL to load")


class StatementOutcomeResponse(BaseModel):
    index: int
    statement: str
    status: str
    reason: str | None = None


class ColumnResponse(BaseModel):
    name: str
    type: str
    not_null: bool = False
    primary_key: bool = False


class TableResponse(BaseModel):
    """A live table and its row count."""

    name: str
    columns: list[ColumnResponse]
    row_count: int


class DebugEntryResponse(BaseModel):
    timestamp: str
    message: str


class LoadSchemaResponse(BaseModel):
    """Outcome of applying a schema to the session."""

    success: bool
    sanitized_sql: str
    statements: int
    applied: int
    failed: int
    outcomes: list[StatementOutcomeResponse]
    tables: list[TableResponse]
    dropped_tables: list[str]
    message: str
    debug: list[DebugEntryResponse] = Field(default_factory=list)


class QueryRequest(BaseModel):
    """Request body for running SQL against the session."""

    query: str = Field(..., min_length=1, description="SQL to execute")


class ResultSetResponse(BaseModel):
    columns: list[str]
    rows: list[list[Any]]


class ErrorLocationResponse(BaseModel):
    line: int | None = None
    column: int | None = None
    context_line: str | None = None


class QueryResponse(BaseModel):
    """Query results, or the engine error and where it points."""

    success: bool
    results: list[ResultSetResponse] = Field(default_factory=list)
    row_count: int = 0
    execution_time_ms: float
    error: str | None = None
    location: ErrorLocationResponse | None = None


class TablesResponse(BaseModel):
    tables: list[TableResponse]


class ResetResponse(BaseModel):
    dropped_tables: list[str]


class FormatRequest(BaseModel):
    query: str = Field(..., description="SQL to format")


class FormatResponse(BaseModel):
    query: str


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Health check response."""

    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual component health checks",
    )


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="Whether the service is ready to handle requests")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness checks",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    request_id: str | None = Field(None, description="Request ID if available")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
