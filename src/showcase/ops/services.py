"""Service toggling and reordering."""

from __future__ import annotations

from typing import Any

from showcase.core.access import ContentAccess
from showcase.core.errors import NotFound
from showcase.core.logging import get_logger
from showcase.core.writer import BulkResult, validate_payload
from showcase.kinds.services import SERVICES, ReorderRequest, ServiceRecord

logger = get_logger(__name__)


def toggle_service(access: ContentAccess, service_id: str) -> ServiceRecord:
    """Flip ``active`` on one service."""
    access.writer.require_store()
    with access.writer.transaction(SERVICES) as repo:
        row = repo.get(service_id)
        if row is None:
            raise NotFound("Service not found")
        row.active = not row.active
    logger.info("service_toggled", id=service_id, active=row.active)
    return repo.to_record(row)  # type: ignore[return-value]


def reorder_services(access: ContentAccess, payload: Any) -> BulkResult:
    """Apply each ``{id, order}`` as its own update.

    There is no batch transaction: a failure part-way leaves the earlier
    updates in place and is reported in ``failed``.
    """
    request = validate_payload(ReorderRequest, payload)
    return access.writer.update_many(
        SERVICES,
        [(item.id, {"order": item.order}) for item in request.service_orders],  # type: ignore[attr-defined]
    )


__all__ = ["reorder_services", "toggle_service"]
