"""
FastAPI Application
===================

Main FastAPI application for the AI SQL playground.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api import __version__
from api.middleware.cors import PreflightPassthroughCORSMiddleware
from api.middleware.telemetry import TelemetryMiddleware
from api.routes.health import router as health_router
from api.routes.playground import router as playground_router
from api.routes.ui import fallback_router
from api.routes.ui import router as ui_router
from api.schemas import ErrorResponse
from observability.logging_config import get_logger, setup_logging
from observability.metrics import metrics_endpoint, setup_metrics
from observability.tracing import setup_tracing
from sql_playground.coaching import SQLCoach
from sql_playground.config import Settings
from sql_playground.generation import SchemaGenerator
from sql_playground.llm.base import LLMInterface
from sql_playground.llm.claude import AnthropicLLM
from sql_playground.playground import Playground

# Field names as clients send them, for "<Field> is required" messages
REQUIRED_FIELD_LABELS = {
    "prompt": "Prompt",
    "schema": "Schema",
    "query": "Query",
    "error": "Error",
    "database": "Database",
}


def create_playground(settings: Settings, llm: Optional[LLMInterface] = None) -> Playground:
    """
    Create the playground with the configured provider.

    Without an explicit LLM and without an API key, both clients run in
    fallback-only mode.
    """
    if llm is None and settings.provider_configured:
        llm = AnthropicLLM(settings)

    return Playground(
        generator=SchemaGenerator(llm=llm, max_tokens=settings.schema_max_tokens),
        coach=SQLCoach(llm=llm, max_tokens=settings.coaching_max_tokens),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    logger = get_logger(__name__)
    logger.info(
        "Starting SQL playground API",
        version=__version__,
        provider_configured=settings.provider_configured,
        model=settings.model,
    )

    app.state.playground = create_playground(settings, app.state.llm)

    yield

    app.state.playground.close()
    logger.info("Shutting down SQL playground API")


def _validation_message(exc: RequestValidationError) -> str:
    """Collapse FastAPI validation errors into one client-facing sentence."""
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return "Invalid JSON"

    missing = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ()) if part != "body"]
        if not loc:
            # body itself missing or not an object
            return "Invalid JSON"
        label = REQUIRED_FIELD_LABELS.get(loc[0], loc[0])
        if label not in missing:
            missing.append(label)

    if len(missing) == 1:
        return f"{missing[0]} is required"
    return f"{', '.join(missing)} are required"


def create_app(settings: Optional[Settings] = None, llm: Optional[LLMInterface] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Service settings (default: read from the environment)
        llm: Provider override, mainly for tests
    """
    settings = settings or Settings.from_env()
    json_logs = settings.log_format.lower() == "json" if settings.log_format else None
    setup_logging(
        level=settings.log_level,
        json_format=json_logs,
        environment=settings.environment,
    )

    app = FastAPI(
        title="AI SQL Playground API",
        description=(
            "Generate practice SQLite databases with Claude, run queries "
            "against them, and get coaching when a query fails."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.llm = llm

    # Add middleware
    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(
        PreflightPassthroughCORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    setup_metrics(app, version=__version__, environment=settings.environment)
    setup_tracing(
        app,
        otlp_endpoint=settings.otlp_endpoint,
        version=__version__,
        environment=settings.environment,
    )

    # Add routes; the catch-all fallback router goes last
    app.include_router(health_router)
    app.include_router(ui_router)
    app.include_router(playground_router)
    app.add_route("/metrics", metrics_endpoint)
    app.include_router(fallback_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report bad input as 400 with an ``error`` message."""
        return JSONResponse(
            status_code=400,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        request_id = getattr(request.state, "request_id", None)
        get_logger(__name__).exception("Unhandled error", request_id=request_id)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="An unexpected error occurred",
                request_id=request_id,
            ).model_dump(),
        )

    return app


# Create app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
