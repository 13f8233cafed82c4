"""Contact inbox: search, stats, read receipts and (bulk) status changes."""

from __future__ import annotations

import datetime
from collections import Counter
from typing import Any

from sqlalchemy import or_

from showcase.core.access import ContentAccess
from showcase.core.errors import NotFound
from showcase.core.orm.base import utcnow
from showcase.core.reader import ReadManyResult, Source
from showcase.core.repository import KindRepository, PageInfo, PageRequest
from showcase.core.writer import BulkResult, validate_payload
from showcase.kinds.contacts import (
    CONTACTS,
    BulkStatusUpdate,
    ContactRecord,
    QueryType,
    Status,
    StatusUpdate,
    Urgency,
)


def compute_stats(contacts: list[ContactRecord]) -> dict[str, Any]:
    statuses = Counter(c.status for c in contacts)
    query_types = Counter(c.query_type for c in contacts)
    urgencies = Counter(c.urgency for c in contacts)
    recent = sorted(
        (c for c in contacts if c.created_at is not None),
        key=lambda c: c.created_at,
        reverse=True,
    )[:5]
    return {
        "totalContacts": len(contacts),
        "newContacts": statuses.get("new", 0),
        "inProgressContacts": statuses.get("in-progress", 0),
        "resolvedContacts": statuses.get("resolved", 0),
        "queryTypeStats": [{"queryType": k, "count": v} for k, v in query_types.most_common()],
        "urgencyStats": [{"urgency": k, "count": v} for k, v in urgencies.most_common()],
        "recentContacts": [CONTACTS.serialize(c) for c in recent],
    }


def contact_stats(access: ContentAccess) -> tuple[dict[str, Any], Source]:
    return access.reader.derive(
        CONTACTS,
        lambda repo: compute_stats([repo.to_record(r) for r in repo.all()]),  # type: ignore[misc]
        compute_stats,  # type: ignore[arg-type]
    )


def submit_contact(access: ContentAccess, payload: Any) -> ContactRecord:
    return access.writer.create(CONTACTS, payload)  # type: ignore[return-value]


def set_status(access: ContentAccess, contact_id: str, payload: Any) -> ContactRecord:
    update = validate_payload(StatusUpdate, payload)
    return access.writer.update(CONTACTS, contact_id, {"status": update.status})  # type: ignore[attr-defined,return-value]


def bulk_status(access: ContentAccess, payload: Any) -> BulkResult:
    request = validate_payload(BulkStatusUpdate, payload)
    return access.writer.update_many(
        CONTACTS,
        [(contact_id, {"status": request.status}) for contact_id in request.ids],  # type: ignore[attr-defined]
    )


def mark_read(access: ContentAccess, contact_id: str) -> ContactRecord:
    """Stamp ``readAt``; a ``new`` contact moves to ``in-progress``."""
    access.writer.require_store()
    with access.writer.transaction(CONTACTS) as repo:
        row = repo.get(contact_id)
        if row is None:
            raise NotFound("Contact not found")
        if row.status == "new":
            row.status = "in-progress"
        row.read_at = utcnow()
        repo.session.flush()
    return repo.to_record(row)  # type: ignore[return-value]


def _matches(
    contact: ContactRecord,
    q: str | None,
    status: Status | None,
    query_type: QueryType | None,
    urgency: Urgency | None,
    since: datetime.datetime | None,
    until: datetime.datetime | None,
) -> bool:
    if q:
        needle = q.lower()
        haystack = (contact.name, contact.email, contact.subject, contact.message)
        if not any(needle in field.lower() for field in haystack):
            return False
    if status and contact.status != status:
        return False
    if query_type and contact.query_type != query_type:
        return False
    if urgency and contact.urgency != urgency:
        return False
    created = contact.created_at
    if since and (created is None or created < since):
        return False
    if until and (created is None or created > until):
        return False
    return True


def search_contacts(
    access: ContentAccess,
    *,
    q: str | None = None,
    status: Status | None = None,
    query_type: QueryType | None = None,
    urgency: Urgency | None = None,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    page: PageRequest | None = None,
) -> ReadManyResult:
    """Text search over name, email, subject and message, newest first.

    ``end_date`` is inclusive: contacts from any time that day match.
    """
    page = page or PageRequest()
    since = datetime.datetime.combine(start_date, datetime.time.min) if start_date else None
    until = datetime.datetime.combine(end_date, datetime.time.max) if end_date else None

    def from_store(repo: KindRepository) -> list[ContactRecord]:
        table = repo.table
        clauses = []
        if q:
            pattern = f"%{q}%"
            clauses.append(
                or_(
                    table.name.ilike(pattern),
                    table.email.ilike(pattern),
                    table.subject.ilike(pattern),
                    table.message.ilike(pattern),
                )
            )
        if status:
            clauses.append(table.status == status)
        if query_type:
            clauses.append(table.query_type == query_type)
        if urgency:
            clauses.append(table.urgency == urgency)
        if since:
            clauses.append(table.created_at >= since)
        if until:
            clauses.append(table.created_at <= until)
        return [repo.to_record(r) for r in repo.all(clauses)]  # type: ignore[misc]

    def from_fallback(records: list[Any]) -> list[ContactRecord]:
        return [
            c for c in records if _matches(c, q, status, query_type, urgency, since, until)
        ]

    matches, source = access.reader.derive(CONTACTS, from_store, from_fallback)
    window = matches[page.offset : page.offset + page.limit]
    return ReadManyResult(window, PageInfo.of(page, len(matches)), source)


__all__ = [
    "bulk_status",
    "compute_stats",
    "contact_stats",
    "mark_read",
    "search_contacts",
    "set_status",
    "submit_contact",
]
