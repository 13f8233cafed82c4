"""
Response envelope normalizer.

Every HTTP response body is built here and only here:

* success — ``{"success": true, "data": ..., "source"?: ..., "message"?: ...}``
  where listings put the records and ``pagination`` inside ``data``.
* failure — ``{"success": false, "message": ..., "errors"?: [...]}``

Examples:
    >>> error_envelope("Validation failed", [FieldError("name", "required")])
    {'success': False, 'message': 'Validation failed', 'errors': [{'field': 'name', 'message': 'required'}]}

Tags:
    showcase, envelope, response, serialization

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from showcase.core.errors import FieldError, ShowcaseError
from showcase.core.kinds import ResourceKind
from showcase.core.reader import ReadManyResult, ReadOneResult, Source


def success_envelope(
    data: Any = None,
    *,
    source: Source | str | None = None,
    message: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if source is not None:
        body["source"] = source.value if isinstance(source, Source) else source
    return body


def list_envelope(kind: ResourceKind, result: ReadManyResult) -> dict[str, Any]:
    """Listing: ``data.<list_key>`` plus ``data.pagination``."""
    return success_envelope(
        {
            kind.list_key: [kind.serialize(r) for r in result.records],
            "pagination": result.pagination.to_dict(),
        },
        source=result.source,
        message=result.message,
    )


def item_envelope(kind: ResourceKind, result: ReadOneResult) -> dict[str, Any]:
    return success_envelope(
        {kind.item_key: kind.serialize(result.record)},
        source=result.source,
        message=result.message,
    )


def record_envelope(
    kind: ResourceKind,
    record: BaseModel,
    message: str | None = None,
) -> dict[str, Any]:
    """Write result (always persisted, so no provenance tag)."""
    return success_envelope({kind.item_key: kind.serialize(record)}, message=message)


def error_envelope(
    message: str,
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = [e.to_dict() for e in errors]
    return body


def envelope_for_error(exc: ShowcaseError) -> dict[str, Any]:
    return error_envelope(exc.message, exc.errors)


__all__ = [
    "envelope_for_error",
    "error_envelope",
    "item_envelope",
    "list_envelope",
    "record_envelope",
    "success_envelope",
]
