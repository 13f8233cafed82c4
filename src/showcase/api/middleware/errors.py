"""
Error handlers — map access-layer errors to the normalised error envelope.

Every failure leaves the API as ``{"success": false, "message": ...,
"errors"?: [...]}`` with the status from
:data:`~showcase.core.errors.ERROR_KIND_TO_STATUS`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from showcase.core.envelope import envelope_for_error, error_envelope
from showcase.core.errors import FieldError, ShowcaseError, field_errors_from_pydantic
from showcase.core.logging import get_logger

logger = get_logger(__name__)


def error_response(
    status: int,
    message: str,
    errors: list[FieldError] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_envelope(message, errors))


async def showcase_error_handler(request: Request, exc: ShowcaseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, kind=exc.kind.value, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=envelope_for_error(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Validation failed", field_errors_from_pydantic(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with the error envelope."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    debug = request.app.state.settings.debug
    return error_response(500, str(exc) if debug else "Server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShowcaseError, showcase_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["error_response", "register_error_handlers"]
