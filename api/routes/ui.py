"""
UI Routes
=========

The embedded UI document, CORS preflight and the placeholder response for
unknown paths. The catch-all router must be included last.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

PLACEHOLDER_TEXT = "AI SQL Schema Generator API"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

router = APIRouter(tags=["UI"])
fallback_router = APIRouter(include_in_schema=False)


def load_index_html() -> str:
    return (STATIC_DIR / "index.html").read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse, summary="Playground UI")
async def index() -> HTMLResponse:
    """Serve the single-page playground."""
    return HTMLResponse(load_index_html())


@fallback_router.options("/{path:path}")
async def preflight(path: str) -> Response:
    """Answer CORS preflight for any path with an empty body."""
    return Response(
        content=None,
        headers={**CORS_HEADERS, "Access-Control-Max-Age": "86400"},
    )


@fallback_router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def placeholder(path: str) -> PlainTextResponse:
    return PlainTextResponse(PLACEHOLDER_TEXT)
