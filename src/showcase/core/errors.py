"""
Typed error hierarchy for the content access layer.

Every failure that can leave the reader, the writer or an ops function is a
:class:`ShowcaseError` subclass carrying an :class:`ErrorKind`.  The HTTP
boundary maps the kind to a status code through :data:`ERROR_KIND_TO_STATUS`
and renders a normalised envelope, so no kind-specific response shape ever
leaks out of a router.

Manifesto:
    - **One taxonomy:** Validation, not-found, auth, availability, conflict
      and internal failures are the only outcomes a caller must handle.
    - **Field-level detail:** Validation errors carry a list of
      ``{field, message}`` entries that frontends render next to inputs.
    - **Error chaining:** The original exception is kept as ``cause``.

Architecture:
    ::

        ShowcaseError (kind, message, errors, cause)
          ├── ValidationFailed    400
          ├── NotFound            404
          ├── Unauthorized        401
          ├── Forbidden           403
          ├── StoreUnavailable    503
          ├── Conflict            409
          └── InternalError       500

Examples:
    >>> err = StoreUnavailable("Database connection unavailable")
    >>> err.kind
    <ErrorKind.STORE_UNAVAILABLE: 'STORE_UNAVAILABLE'>
    >>> status_for(err.kind)
    503

Tags:
    showcase, errors, exception-hierarchy, http-mapping

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Caller-visible failure categories."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


ERROR_KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.STORE_UNAVAILABLE: 503,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


def status_for(kind: ErrorKind) -> int:
    """Resolve an :class:`ErrorKind` to an HTTP status, defaulting to 500."""
    return ERROR_KIND_TO_STATUS.get(kind, 500)


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single field-level validation problem."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ShowcaseError(Exception):
    """Base class for all errors raised by the access layer.

    Attributes:
        kind: The :class:`ErrorKind` used for status mapping.
        message: Human-readable summary.
        errors: Optional field-level details.
        cause: The underlying exception, when there is one.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        errors: list[FieldError] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[FieldError] = list(errors or [])
        self.cause = cause

    @property
    def status_code(self) -> int:
        return status_for(self.kind)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.errors:
            d["errors"] = [e.to_dict() for e in self.errors]
        return d

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationFailed(ShowcaseError):
    """Schema-level constraint violation (400)."""

    kind = ErrorKind.VALIDATION_FAILED


class NotFound(ShowcaseError):
    """The requested record or kind does not exist (404)."""

    kind = ErrorKind.NOT_FOUND


class Unauthorized(ShowcaseError):
    """Missing, malformed or expired credentials (401)."""

    kind = ErrorKind.UNAUTHORIZED


class Forbidden(ShowcaseError):
    """Authenticated, but not allowed to perform the operation (403)."""

    kind = ErrorKind.FORBIDDEN


class StoreUnavailable(ShowcaseError):
    """The persistent store is unreachable; writes are refused (503)."""

    kind = ErrorKind.STORE_UNAVAILABLE


class Conflict(ShowcaseError):
    """A unique constraint was violated (409)."""

    kind = ErrorKind.CONFLICT


class InternalError(ShowcaseError):
    """Unexpected failure (500)."""

    kind = ErrorKind.INTERNAL


def field_errors_from_pydantic(exc: Any) -> list[FieldError]:
    """Flatten a ``pydantic.ValidationError`` (or FastAPI's
    ``RequestValidationError``) into :class:`FieldError` entries.

    Location tuples are joined with dots; the ``body`` / ``query`` prefixes
    FastAPI adds are dropped.
    """
    out: list[FieldError] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes custom ValueError messages
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append(FieldError(field=".".join(loc) or "__root__", message=msg))
    return out


__all__ = [
    "ERROR_KIND_TO_STATUS",
    "Conflict",
    "ErrorKind",
    "FieldError",
    "Forbidden",
    "InternalError",
    "NotFound",
    "ShowcaseError",
    "StoreUnavailable",
    "Unauthorized",
    "ValidationFailed",
    "field_errors_from_pydantic",
    "status_for",
]
