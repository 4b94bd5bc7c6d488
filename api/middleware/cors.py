"""
CORS Middleware
===============

CORS headers on regular responses, with every OPTIONS request left to the
application's own preflight route.
"""

from fastapi.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send


class PreflightPassthroughCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that never answers preflights itself.

    Starlette's preflight reply has a non-empty body and rejects request
    headers outside the allow-list; the playground answers every OPTIONS
    request with an empty 200 instead.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
