"""
Observability Module
====================

Metrics, tracing, and structured logging for the playground service.
"""

from observability.logging_config import get_logger, setup_logging
from observability.metrics import (
    metrics_endpoint,
    setup_metrics,
    track_coaching,
    track_generation,
    track_load,
    track_query,
)
from observability.tracing import get_tracer, setup_tracing, traced

__all__ = [
    "setup_metrics",
    "metrics_endpoint",
    "track_generation",
    "track_coaching",
    "track_load",
    "track_query",
    "setup_tracing",
    "get_tracer",
    "traced",
    "setup_logging",
    "get_logger",
]
