"""
Contact router — public form submission plus the admin inbox.

Endpoints:
    POST   /contact               Submit the contact form (public)
    GET    /contact               List (admin; filters: status, queryType, urgency)
    GET    /contact/search        Text / filter / date-range search (admin)
    GET    /contact/stats         Aggregates (admin)
    PUT    /contact/bulk/status   Set status on many (admin)
    GET    /contact/{id}          Detail (admin)
    PUT    /contact/{id}/status   Set status (admin)
    PATCH  /contact/{id}/read     Mark read (admin)
    DELETE /contact/{id}          Delete (admin)

Tags:
    showcase, api, router, contacts

Doc-Types:
    api-reference
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope, success_envelope
from showcase.kinds.contacts import CONTACTS, QueryType, Status, Urgency
from showcase.ops import contacts as contact_ops

router = APIRouter(prefix="/contact")

Payload = Annotated[dict[str, Any], Body()]


@router.post("", status_code=201)
def submit_contact(access: Access, body: Payload):
    record = contact_ops.submit_contact(access, body)
    return record_envelope(
        CONTACTS, record, "Thank you for your message. We will get back to you soon!"
    )


@router.get("")
def list_contacts(
    access: Access,
    admin: CurrentAdmin,
    page: Page,
    status: Status | None = Query(None),
    query_type: QueryType | None = Query(None, alias="queryType"),
    urgency: Urgency | None = Query(None),
):
    result = access.reader.read_many(
        CONTACTS, {"status": status, "queryType": query_type, "urgency": urgency}, page
    )
    return list_envelope(CONTACTS, result)


@router.get("/search")
def search_contacts(
    access: Access,
    admin: CurrentAdmin,
    page: Page,
    q: str | None = Query(None),
    status: Status | None = Query(None),
    query_type: QueryType | None = Query(None, alias="queryType"),
    urgency: Urgency | None = Query(None),
    start_date: datetime.date | None = Query(None, alias="startDate"),
    end_date: datetime.date | None = Query(None, alias="endDate"),
):
    result = contact_ops.search_contacts(
        access,
        q=q,
        status=status,
        query_type=query_type,
        urgency=urgency,
        start_date=start_date,
        end_date=end_date,
        page=page,
    )
    return list_envelope(CONTACTS, result)


@router.get("/stats")
def contact_stats(access: Access, admin: CurrentAdmin):
    stats, source = contact_ops.contact_stats(access)
    return success_envelope({"stats": stats}, source=source)


@router.put("/bulk/status")
def bulk_status(access: Access, admin: CurrentAdmin, body: Payload):
    result = contact_ops.bulk_status(access, body)
    return success_envelope(
        {"modifiedCount": len(result.updated), "failed": result.failed},
        message=f"{len(result.updated)} contacts updated successfully",
    )


@router.get("/{contact_id}")
def get_contact(contact_id: str, access: Access, admin: CurrentAdmin):
    return item_envelope(CONTACTS, access.reader.read_one(CONTACTS, contact_id))


@router.put("/{contact_id}/status")
def set_status(contact_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = contact_ops.set_status(access, contact_id, body)
    return record_envelope(CONTACTS, record, "Contact status updated successfully")


@router.patch("/{contact_id}/read")
def mark_read(contact_id: str, access: Access, admin: CurrentAdmin):
    record = contact_ops.mark_read(access, contact_id)
    return record_envelope(CONTACTS, record, "Contact marked as read")


@router.delete("/{contact_id}")
def delete_contact(contact_id: str, access: Access, admin: CurrentAdmin):
    access.writer.delete(CONTACTS, contact_id)
    return success_envelope(message="Contact deleted successfully")
