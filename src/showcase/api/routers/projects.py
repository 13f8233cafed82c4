"""
Projects router.

Endpoints:
    GET    /projects                 List (filters: status, category)
    GET    /projects/stats           Aggregates
    GET    /projects/{id}            Detail
    POST   /projects                 Create (admin)
    PUT    /projects/{id}            Update (admin)
    PATCH  /projects/{id}/progress   Set progress, derive status (admin)
    DELETE /projects/{id}            Delete (admin)

Tags:
    showcase, api, router, projects

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from showcase.api.deps import Access, CurrentAdmin, Page
from showcase.core.envelope import item_envelope, list_envelope, record_envelope, success_envelope
from showcase.kinds.projects import PROJECTS, Status
from showcase.ops import projects as project_ops

router = APIRouter(prefix="/projects")

Payload = Annotated[dict[str, Any], Body()]


@router.get("")
def list_projects(
    access: Access,
    page: Page,
    status: Status | None = Query(None),
    category: str | None = Query(None),
):
    result = access.reader.read_many(PROJECTS, {"status": status, "category": category}, page)
    return list_envelope(PROJECTS, result)


@router.get("/stats")
def project_stats(access: Access):
    stats, source = project_ops.project_stats(access)
    return success_envelope({"stats": stats}, source=source)


@router.get("/{project_id}")
def get_project(project_id: str, access: Access):
    return item_envelope(PROJECTS, access.reader.read_one(PROJECTS, project_id))


@router.post("", status_code=201)
def create_project(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.create(PROJECTS, body)
    return record_envelope(PROJECTS, record, "Project created successfully")


@router.put("/{project_id}")
def update_project(project_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.update(PROJECTS, project_id, body)
    return record_envelope(PROJECTS, record, "Project updated successfully")


@router.patch("/{project_id}/progress")
def update_progress(project_id: str, access: Access, admin: CurrentAdmin, body: Payload):
    record = project_ops.set_progress(access, project_id, body)
    return record_envelope(PROJECTS, record, "Project progress updated successfully")


@router.delete("/{project_id}")
def delete_project(project_id: str, access: Access, admin: CurrentAdmin):
    access.writer.delete(PROJECTS, project_id)
    return success_envelope(message="Project deleted successfully")
