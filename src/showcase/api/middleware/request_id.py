"""Request-ID middleware.

A client-supplied ``X-Request-ID`` is kept when it looks sane (short,
printable), otherwise a fresh hex id is issued.  The id is echoed on the
response and bound into the structlog context for the life of the request,
so a ``fallback_served`` or ``store_query_failed`` event can be traced back
to the call that triggered it.

Tags:
    showcase, api, middleware, request-id, tracing

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from showcase.core.logging import bind_context, unbind_context

HEADER = "X-Request-ID"
MAX_LENGTH = 128


def resolve_request_id(candidate: str | None) -> str:
    if candidate and len(candidate) <= MAX_LENGTH and candidate.isprintable():
        return candidate
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(HEADER))
        request.state.request_id = request_id
        bind_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            unbind_context("request_id")
        response.headers[HEADER] = request_id
        return response
