"""Timing middleware: ``X-Process-Time-Ms`` plus one access-log line per request.

The log line records the store state seen by the probe when the response
left, which makes it easy to tell fallback traffic from live traffic in the
logs.  Server errors are logged at warning level.

Tags:
    showcase, api, middleware, timing, observability

Doc-Types:
    api-reference
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from showcase.core.logging import get_logger

logger = get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Process-Time-Ms"] = str(elapsed_ms)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_served",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            store=request.app.state.access.probe.state.value,
            elapsed_ms=elapsed_ms,
        )
        return response
