"""
Services router.

Endpoints:
    GET    /services              List (filters: category, popular, active)
    POST   /services/reorder      Bulk order update (admin)
    GET    /services/{id}         Detail
    POST   /services              Create (admin)
    PUT    /services/{id}         Update (admin)
    PATCH  /services/{id}/toggle  Flip active (admin)
    DELETE /services/{id}         Delete (admin)

Tags:
    showcase, api, router, services

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope, success_envelope
from showcase.kinds.services import SERVICES, Category
from showcase.ops import services as service_ops

router = APIRouter(prefix="/services")

Payload = Annotated[dict[str, Any], Body()]


@router.get("")
def list_services(
    access: Access,
    page: Page,
    category: Category | None = Query(None),
    popular: bool | None = Query(None),
    active: bool | None = Query(None),
):
    result = access.reader.read_many(
        SERVICES, {"category": category, "popular": popular, "active": active}, page
    )
    return list_envelope(SERVICES, result)


@router.post("/reorder")
def reorder_services(access: Access, admin: CurrentAdmin, body: Payload):
    result = service_ops.reorder_services(access, body)
    message = (
        "Services reordered successfully"
        if result.ok
        else f"Services reordered with {len(result.failed)} failure(s)"
    )
    return success_envelope(
        {
            "services": [SERVICES.serialize(r) for r in result.updated],
            "failed": result.failed,
        },
        message=message,
    )


@router.get("/{service_id}")
def get_service(service_id: str, access: Access):
    return item_envelope(SERVICES, access.reader.read_one(SERVICES, service_id))


@router.post("", status_code=201)
def create_service(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.create(SERVICES, body)
    return record_envelope(SERVICES, record, "Service created successfully")


@router.put("/{service_id}")
def update_service(service_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.update(SERVICES, service_id, body)
    return record_envelope(SERVICES, record, "Service updated successfully")


@router.patch("/{service_id}/toggle")
def toggle_service(service_id: str, access: Access, admin: CurrentAdmin):
    record = service_ops.toggle_service(access, service_id)
    state = "activated" if record.active else "deactivated"
    return record_envelope(SERVICES, record, f"Service {state} successfully")


@router.delete("/{service_id}")
def delete_service(service_id: str, access: Access, admin: CurrentAdmin):
    access.writer.delete(SERVICES, service_id)
    return success_envelope(message="Service deleted successfully")
