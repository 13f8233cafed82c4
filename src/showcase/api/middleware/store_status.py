"""Store-status middleware — adds ``X-DB-Status`` to every response.

Lets the frontend show a "running on cached content" banner without parsing
bodies.  Reads the probe's cached state; never touches the store.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class StoreStatusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        access = getattr(request.app.state, "access", None)
        available = access is not None and access.probe.is_available()
        response.headers["X-DB-Status"] = "connected" if available else "disconnected"
        return response
