"""
Playground Routes
=================

Schema generation, coaching, and the session endpoints the UI drives.
"""

import time

from fastapi import APIRouter, Depends, Request

from api.schemas import (
    CoachingResponse,
    ColumnResponse,
    DebugEntryResponse,
    ErrorLocationResponse,
    ErrorResponse,
    ExplainErrorRequest,
    ExplainErrorResponse,
    FormatRequest,
    FormatResponse,
    GenerateSchemaRequest,
    GenerateSchemaResponse,
    LoadSchemaRequest,
    LoadSchemaResponse,
    QueryRequest,
    QueryResponse,
    ResetResponse,
    ResultSetResponse,
    SourceEnum,
    StatementOutcomeResponse,
    TableResponse,
    TablesResponse,
)
from observability.metrics import track_coaching, track_generation, track_load, track_query
from observability.tracing import traced
from sql_playground.models import TableInfo
from sql_playground.playground import Playground
from sql_playground.sql.formatter import format_sql

router = APIRouter(tags=["Playground"])

BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid request"}}


def get_playground(request: Request) -> Playground:
    """Dependency to get the playground from app state."""
    return request.app.state.playground


def _table_response(table: TableInfo) -> TableResponse:
    return TableResponse(
        name=table.name,
        columns=[
            ColumnResponse(
                name=c.name,
                type=c.type,
                not_null=c.not_null,
                primary_key=c.primary_key,
            )
            for c in table.columns
        ],
        row_count=table.row_count,
    )


@router.post(
    "/generate-schema",
    response_model=GenerateSchemaResponse,
    response_model_exclude_unset=True,
    responses=BAD_REQUEST,
    summary="Generate a practice database",
    description="Asks Claude for a SQLite schema with sample data; falls back to a fixed schema",
)
@traced("generate_schema")
async def generate_schema(
    body: GenerateSchemaRequest,
    playground: Playground = Depends(get_playground),
) -> GenerateSchemaResponse:
    """
    Generate schema SQL from a description.

    Provider failures are never surfaced as errors: the response carries
    the fallback schema with ``source`` set to ``fallback`` and the reason in
    ``error``.
    """
    start_time = time.perf_counter()
    result = await playground.generate_schema(body.prompt)
    track_generation(result.source.value, time.perf_counter() - start_time)

    response = GenerateSchemaResponse(
        database=result.text,
        source=SourceEnum(result.source.value),
    )
    if result.error_note:
        response.error = result.error_note
    return response


@router.post(
    "/explain-sql-error",
    response_model=ExplainErrorResponse,
    response_model_exclude_unset=True,
    responses=BAD_REQUEST,
    summary="Explain a failed query",
    description="Returns a plain-English explanation, a suggested fix and hints",
)
@traced("explain_sql_error")
async def explain_sql_error(
    body: ExplainErrorRequest,
    playground: Playground = Depends(get_playground),
) -> ExplainErrorResponse:
    """Coach the user through a failed query."""
    start_time = time.perf_counter()
    outcome = await playground.explain_error(body.schema_sql, body.query, body.error)
    track_coaching(outcome.source.value, time.perf_counter() - start_time)

    response = ExplainErrorResponse(
        coaching=CoachingResponse(
            explanation=outcome.result.explanation,
            suggested_fix=outcome.result.suggested_fix,
            hints=outcome.result.hints,
        ),
        source=SourceEnum(outcome.source.value),
    )
    if outcome.error_note:
        response.error = outcome.error_note
    return response


@router.post(
    "/session/load",
    response_model=LoadSchemaResponse,
    responses=BAD_REQUEST,
    summary="Load schema SQL into the session",
)
async def load_schema(
    body: LoadSchemaRequest,
    playground: Playground = Depends(get_playground),
) -> LoadSchemaResponse:
    """
    Drop every table, then apply the sanitized statements one by one.

    Failing statements are reported and skipped; the rest still run.
    """
    report = playground.load_schema(body.database)
    track_load(report.summary.applied, report.summary.failed)

    return LoadSchemaResponse(
        success=report.success,
        sanitized_sql=report.sanitized_sql,
        statements=len(report.statements),
        applied=report.summary.applied,
        failed=report.summary.failed,
        outcomes=[
            StatementOutcomeResponse(
                index=o.index,
                statement=o.statement,
                status=o.status.value,
                reason=o.reason,
            )
            for o in report.summary.outcomes
        ],
        tables=[_table_response(t) for t in report.tables],
        dropped_tables=report.dropped_tables,
        message=report.status_message,
        debug=[DebugEntryResponse(timestamp=d.timestamp, message=d.message) for d in report.debug_trail],
    )


@router.post(
    "/session/query",
    response_model=QueryResponse,
    responses=BAD_REQUEST,
    summary="Run SQL against the session",
)
async def run_query(
    body: QueryRequest,
    playground: Playground = Depends(get_playground),
) -> QueryResponse:
    """Execute a query. Engine errors come back verbatim with a location hint."""
    report = playground.run_query(body.query)
    track_query(report.success, report.execution_time_ms / 1000)

    location = None
    if not report.success:
        location = ErrorLocationResponse(
            line=report.location.line,
            column=report.location.column,
            context_line=report.location.context_line,
        )

    return QueryResponse(
        success=report.success,
        results=[
            ResultSetResponse(columns=r.columns, rows=[list(row) for row in r.rows])
            for r in report.results
        ],
        row_count=sum(len(r.rows) for r in report.results),
        execution_time_ms=round(report.execution_time_ms, 3),
        error=report.error,
        location=location,
    )


@router.get(
    "/session/tables",
    response_model=TablesResponse,
    summary="List tables in the session",
)
async def list_tables(playground: Playground = Depends(get_playground)) -> TablesResponse:
    """Live table listing with row counts."""
    return TablesResponse(tables=[_table_response(t) for t in playground.tables()])


@router.post(
    "/session/reset",
    response_model=ResetResponse,
    summary="Drop every table in the session",
)
async def reset_session(playground: Playground = Depends(get_playground)) -> ResetResponse:
    return ResetResponse(dropped_tables=playground.reset())


@router.post(
    "/sql/format",
    response_model=FormatResponse,
    summary="Format SQL for the editor",
)
async def format_query(body: FormatRequest) -> FormatResponse:
    return FormatResponse(query=format_sql(body.query))
