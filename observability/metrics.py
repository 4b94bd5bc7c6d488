"""
Prometheus Metrics
==================

Application metrics for monitoring and alerting.
"""

import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

# Create a custom registry for this application
REGISTRY = CollectorRegistry()

APP_INFO = Info(
    "sql_playground",
    "SQL playground application information",
    registry=REGISTRY,
)

# Provider-backed operations, labelled by claude-api / fallback
SCHEMA_GENERATIONS_TOTAL = Counter(
    "sql_playground_schema_generations_total",
    "Schema generation requests by payload source",
    ["source"],
    registry=REGISTRY,
)

COACHING_REQUESTS_TOTAL = Counter(
    "sql_playground_coaching_requests_total",
    "Coaching requests by payload source",
    ["source"],
    registry=REGISTRY,
)

PROVIDER_DURATION = Histogram(
    "sql_playground_provider_duration_seconds",
    "Time spent producing generation or coaching payloads",
    ["operation"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

# Session metrics
STATEMENTS_TOTAL = Counter(
    "sql_playground_statements_total",
    "Schema statements applied during loads",
    ["status"],  # applied, failed
    registry=REGISTRY,
)

QUERIES_TOTAL = Counter(
    "sql_playground_queries_total",
    "Ad hoc queries executed",
    ["status"],  # success, error
    registry=REGISTRY,
)

QUERY_DURATION = Histogram(
    "sql_playground_query_duration_seconds",
    "Ad hoc query execution time in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=REGISTRY,
)


def setup_metrics(app: FastAPI, version: str = "0.1.0", environment: str = "development") -> None:
    """
    Set up Prometheus metrics for the FastAPI application.

    Args:
        app: FastAPI application instance
        version: Application version reported in the info metric
        environment: Deployment environment reported in the info metric
    """
    APP_INFO.info({
        "version": version,
        "environment": environment,
    })

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next: Callable) -> Response:
        """Middleware to track HTTP metrics."""
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        # Label by route template so unknown paths do not explode cardinality
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")

        HTTP_REQUESTS_TOTAL.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).inc()

        HTTP_REQUEST_DURATION.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


def track_generation(source: str, duration_seconds: float) -> None:
    """Record a finished schema generation."""
    SCHEMA_GENERATIONS_TOTAL.labels(source=source).inc()
    PROVIDER_DURATION.labels(operation="generate_schema").observe(duration_seconds)


def track_coaching(source: str, duration_seconds: float) -> None:
    """Record a finished coaching request."""
    COACHING_REQUESTS_TOTAL.labels(source=source).inc()
    PROVIDER_DURATION.labels(operation="explain_sql_error").observe(duration_seconds)


def track_load(applied: int, failed: int) -> None:
    """Record statement outcomes of a schema load."""
    STATEMENTS_TOTAL.labels(status="applied").inc(applied)
    STATEMENTS_TOTAL.labels(status="failed").inc(failed)


def track_query(success: bool, duration_seconds: float) -> None:
    """Record an ad hoc query execution."""
    QUERIES_TOTAL.labels(status="success" if success else "error").inc()
    QUERY_DURATION.observe(duration_seconds)


async def metrics_endpoint(request: Request) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
