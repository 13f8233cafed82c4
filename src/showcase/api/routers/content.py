"""
Content router — the page copy for hero, about, services and home.

Endpoints:
    GET  /content             All sections
    GET  /content/{section}   One section (provisioned from defaults if missing)
    POST /content             Create a section (admin)
    PUT  /content/{section}   Upsert a section (admin)

Tags:
    showcase, api, router, content

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope
from showcase.core.errors import FieldError, ValidationFailed
from showcase.kinds.content import CONTENT, SECTIONS

router = APIRouter(prefix="/content")

Payload = Annotated[dict[str, Any], Body()]


def _check_section(section: str) -> str:
    if section not in SECTIONS:
        raise ValidationFailed(
            "Invalid section",
            errors=[FieldError("section", f"Must be one of: {', '.join(SECTIONS)}")],
        )
    return section


@router.get("")
def list_content(access: Access, page: Page):
    return list_envelope(CONTENT, access.reader.read_many(CONTENT, None, page))


@router.get("/{section}")
def get_section(section: str, access: Access):
    result = access.reader.read_singleton(CONTENT, _check_section(section))
    return item_envelope(CONTENT, result)


@router.post("", status_code=201)
def create_section(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.create(CONTENT, body)
    return record_envelope(CONTENT, record, "Content created successfully")


@router.put("/{section}")
def upsert_section(section: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.upsert_singleton(CONTENT, _check_section(section), body)
    return record_envelope(CONTENT, record, "Content updated successfully")
