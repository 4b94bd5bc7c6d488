"""
Health Check Routes
===================

Kubernetes-compatible health and readiness endpoints.
"""

import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from api import __version__
from api.schemas import HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["Health"])


def _session_alive(request: Request) -> bool:
    playground = getattr(request.app.state, "playground", None)
    if playground is None:
        return False
    try:
        playground.session.connection.execute("SELECT 1")
    except sqlite3.Error:
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the service",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint for load balancers and monitoring.

    A missing provider credential degrades the service (fallback payloads
    only) but does not make it unhealthy.

    Returns:
        HealthResponse with current service status
    """
    settings = request.app.state.settings
    checks = {
        "api": True,
        "database": _session_alive(request),
        "provider_configured": settings.provider_configured,
    }

    if not checks["database"]:
        status = HealthStatus.UNHEALTHY
    elif not checks["provider_configured"]:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.HEALTHY

    return HealthResponse(
        status=status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        checks=checks,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Returns whether the service is ready to handle requests",
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Readiness check for Kubernetes.

    Returns:
        ReadinessResponse indicating readiness status
    """
    checks = {
        "playground_initialized": getattr(request.app.state, "playground", None) is not None,
        "database": _session_alive(request),
    }

    return ReadinessResponse(
        ready=all(checks.values()),
        checks=checks,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Simple liveness probe",
)
async def liveness_check() -> dict:
    """Simple liveness probe."""
    return {"status": "ok"}
