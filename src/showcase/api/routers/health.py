"""
Health endpoints backed by the connectivity probe.

``create_health_router()`` gives the app three routes:

* ``GET {prefix}``        — envelope with service, version, store state, uptime
* ``GET {prefix}/ready``  — 503 while the store is unavailable
* ``GET {prefix}/live``   — always 200

The probe is read, never pinged, so health checks cost nothing and agree
with what the reader and writer see.

Tags:
    showcase, api, health, probe

Doc-Types:
    api-reference
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from showcase.core.envelope import success_envelope

_START_TIME = time.monotonic()


def _health_body(request: Request, service_name: str, version: str) -> dict[str, Any]:
    probe = request.app.state.access.probe
    available = probe.is_available()
    return {
        "status": "healthy" if available else "degraded",
        "service": service_name,
        "version": version,
        "store": probe.state.value,
        "uptime_s": round(time.monotonic() - _START_TIME, 1),
        "timestamp": datetime.now(UTC).isoformat(),
    }


def create_health_router(
    service_name: str,
    version: str,
    prefix: str = "/health",
) -> APIRouter:
    """Create an ``APIRouter`` with the standard health endpoints.

    Parameters
    ----------
    service_name : str
        Human-readable name reported in the body.
    version : str
        Service version string.
    prefix : str
        URL prefix (default ``"/health"``).
    """
    router = APIRouter(tags=["health"])

    @router.get(prefix)
    def health(request: Request):
        """Primary health; a down store degrades but does not fail the service."""
        return success_envelope(_health_body(request, service_name, version))

    @router.get(f"{prefix}/ready")
    def readiness(request: Request) -> JSONResponse:
        """Readiness probe — 503 while the store is unavailable."""
        body = _health_body(request, service_name, version)
        ready = body["status"] == "healthy"
        return JSONResponse(
            content={"success": ready, "data": body},
            status_code=200 if ready else 503,
        )

    @router.get(f"{prefix}/live")
    def liveness():
        """Liveness probe — always 200 while the process runs."""
        return {"status": "alive"}

    return router
