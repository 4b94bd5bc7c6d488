"""API middleware."""

from api.middleware.cors import PreflightPassthroughCORSMiddleware
from api.middleware.telemetry import TelemetryMiddleware

__all__ = ["PreflightPassthroughCORSMiddleware", "TelemetryMiddleware"]
