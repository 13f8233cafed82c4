"""Contact form submissions.  No catalog: an empty inbox stays empty."""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import AfterValidator, Field

from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import ContactTable
from showcase.kinds._common import Email, RecordModel, UtcDatetime, WireModel

QueryType = Literal["general", "project", "support", "career", "partnership"]
Urgency = Literal["low", "medium", "high", "critical"]
Status = Literal["new", "in-progress", "resolved"]

_NOT_PHONE = re.compile(r"[^\d+]")


def _sanitize_phone(value: str) -> str:
    return _NOT_PHONE.sub("", value)


Phone = Annotated[str, AfterValidator(_sanitize_phone)]


class ContactCreate(WireModel):
    name: str = Field(min_length=1, max_length=100)
    email: Email
    phone: Phone = ""
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)
    query_type: QueryType = "general"
    urgency: Urgency = "medium"


class ContactUpdate(WireModel):
    status: Status = None
    query_type: QueryType = None
    urgency: Urgency = None


class StatusUpdate(WireModel):
    status: Status


class BulkStatusUpdate(WireModel):
    ids: list[str] = Field(min_length=1)
    status: Status


class ContactRecord(RecordModel):
    name: str
    email: str
    phone: str | None = ""
    subject: str
    message: str
    query_type: QueryType = "general"
    urgency: Urgency = "medium"
    status: Status = "new"
    read_at: UtcDatetime | None = None


CONTACTS = ResourceKind(
    name="contacts",
    table=ContactTable,
    record_model=ContactRecord,
    create_model=ContactCreate,
    update_model=ContactUpdate,
    list_key="contacts",
    item_key="contact",
    label="Contact",
    filters={
        "status": ("status", "eq"),
        "queryType": ("query_type", "eq"),
        "urgency": ("urgency", "eq"),
    },
    order_by=(("created_at", "desc"),),
)
