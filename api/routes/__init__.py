"""API Routes."""

from api.routes.health import router as health_router
from api.routes.playground import router as playground_router
from api.routes.ui import fallback_router, router as ui_router

__all__ = ["health_router", "playground_router", "ui_router", "fallback_router"]
