"""
Achievements router — awards, milestones and certifications.

Endpoints:
    GET    /achievements        List (filters: category, featured)
    GET    /achievements/{id}   Detail
    POST   /achievements        Create (admin)
    PUT    /achievements/{id}   Update (admin)
    DELETE /achievements/{id}   Delete (admin)

Tags:
    showcase, api, router, achievements

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope, success_envelope
from showcase.kinds.achievements import ACHIEVEMENTS, Category

router = APIRouter(prefix="/achievements")

Payload = Annotated[dict[str, Any], Body()]


@router.get("")
def list_achievements(
    access: Access,
    page: Page,
    category: Category | None = Query(None),
    featured: bool | None = Query(None),
):
    result = access.reader.read_many(
        ACHIEVEMENTS, {"category": category, "featured": featured}, page
    )
    return list_envelope(ACHIEVEMENTS, result)


@router.get("/{achievement_id}")
def get_achievement(achievement_id: str, access: Access):
    return item_envelope(ACHIEVEMENTS, access.reader.read_one(ACHIEVEMENTS, achievement_id))


@router.post("", status_code=201)
def create_achievement(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.create(ACHIEVEMENTS, body)
    return record_envelope(ACHIEVEMENTS, record, "Achievement created successfully")


@router.put("/{achievement_id}")
def update_achievement(achievement_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.update(ACHIEVEMENTS, achievement_id, body)
    return record_envelope(ACHIEVEMENTS, record, "Achievement updated successfully")


@router.delete("/{achievement_id}")
def delete_achievement(achievement_id: str, access: Access, admin: CurrentAdmin):
    access.writer.delete(ACHIEVEMENTS, achievement_id)
    return success_envelope(message="Achievement deleted successfully")
