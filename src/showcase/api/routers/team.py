"""
Team router.

Endpoints:
    GET    /team                  Active members (``includeInactive`` / ``active`` override)
    GET    /team/search           Text / department / skills search
    GET    /team/stats            Aggregates
    GET    /team/departments      Active departments with counts
    GET    /team/{id}             Detail (inactive members included)
    POST   /team                  Create (admin)
    PUT    /team/{id}             Update (admin)
    DELETE /team/{id}             Deactivate (admin)
    DELETE /team/{id}/permanent   Delete (admin)

Tags:
    showcase, api, router, team

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope, success_envelope
from showcase.kinds.team import TEAM
from showcase.ops import team as team_ops

router = APIRouter(prefix="/team")

Payload = Annotated[dict[str, Any], Body()]


@router.get("")
def list_team(
    access: Access,
    page: Page,
    department: str | None = Query(None),
    active: bool | None = Query(None),
    is_leader: bool | None = Query(None, alias="isLeader"),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    result = access.reader.read_many(
        TEAM,
        {"department": department, "active": active, "isLeader": is_leader},
        page,
        include_inactive=include_inactive,
    )
    return list_envelope(TEAM, result)


@router.get("/search")
def search_team(
    access: Access,
    page: Page,
    q: str | None = Query(None),
    department: str | None = Query(None),
    skills: str | None = Query(None, description="Comma-separated skills"),
):
    result = team_ops.search_team(access, q=q, department=department, skills=skills, page=page)
    return list_envelope(TEAM, result)


@router.get("/stats")
def team_stats(access: Access):
    stats, source = team_ops.team_stats(access)
    return success_envelope({"stats": stats}, source=source)


@router.get("/departments")
def team_departments(access: Access):
    departments, source = team_ops.team_departments(access)
    return success_envelope({"departments": departments}, source=source)


@router.get("/{member_id}")
def get_member(member_id: str, access: Access):
    return item_envelope(TEAM, access.reader.read_one(TEAM, member_id))


@router.post("", status_code=201)
def create_member(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.create(TEAM, body)
    return record_envelope(TEAM, record, "Team member created successfully")


@router.put("/{member_id}")
def update_member(member_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.update(TEAM, member_id, body)
    return record_envelope(TEAM, record, "Team member updated successfully")


@router.delete("/{member_id}")
def deactivate_member(member_id: str, access: Access, admin: CurrentAdmin):
    record = team_ops.deactivate_member(access, member_id)
    return record_envelope(TEAM, record, "Team member deactivated successfully")


@router.delete("/{member_id}/permanent")
def delete_member(member_id: str, access: Access, admin: CurrentAdmin):
    access.writer.delete(TEAM, member_id)
    return success_envelope(message="Team member permanently deleted")
