"""
OpenTelemetry Tracing
=====================

Distributed tracing for request flow visualization.
"""

from functools import wraps
from typing import Optional

import structlog
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = structlog.get_logger(__name__)


def build_resource(service_name: str, version: str, environment: str) -> Resource:
    """Resource attributes attached to every exported span."""
    return Resource.create({
        SERVICE_NAME: service_name,
        "service.version": version,
        "deployment.environment": environment,
    })


def setup_tracing(
    app: FastAPI,
    service_name: str = "sql-playground-api",
    otlp_endpoint: Optional[str] = None,
    version: str = "0.1.0",
    environment: str = "development",
) -> bool:
    """
    Set up OpenTelemetry tracing for the application.

    Tracing stays off unless an OTLP endpoint is given. Callers pass
    ``Settings.otlp_endpoint``, which is read from
    ``OTEL_EXPORTER_OTLP_ENDPOINT``.

    Args:
        app: FastAPI application instance
        service_name: Name of the service for traces
        otlp_endpoint: OTLP collector endpoint
        version: Service version attached to every span
        environment: Deployment environment attached to every span

    Returns:
        Whether tracing was enabled
    """
    if not otlp_endpoint or otlp_endpoint == "disabled":
        logger.debug("Tracing disabled")
        return False

    provider = TracerProvider(resource=build_resource(service_name, version, environment))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app)
    logger.info("Tracing enabled", endpoint=otlp_endpoint)
    return True


def get_tracer(name: str = __name__) -> trace.Tracer:
    """
    Get a tracer instance for creating spans.

    Without a configured provider OpenTelemetry hands back a no-op tracer.
    """
    return trace.get_tracer(name)


def traced(operation_name: str):
    """
    Decorator to trace an async route handler or service call.

    Args:
        operation_name: Name of the operation for the span
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            tracer = get_tracer(func.__module__)
            with tracer.start_as_current_span(operation_name) as span:
                try:
                    result = await func(*args, **kwargs)
                    source = getattr(result, "source", None)
                    if source is not None:
                        span.set_attribute("playground.source", str(source))
                    return result
                except Exception as e:
                    span.set_attribute("error", True)
                    span.set_attribute("error.message", str(e))
                    raise
        return wrapper
    return decorator
