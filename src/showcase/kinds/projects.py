"""Projects and their delivery progress."""

from __future__ import annotations

import datetime
from typing import Annotated, Literal

from pydantic import Field, model_validator

from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import ProjectTable
from showcase.kinds._common import ImageRef, RecordModel, StringList, UtcDatetime, WireModel

Status = Literal["planning", "in-progress", "completed", "on-hold"]
STATUSES: tuple[str, ...] = ("planning", "in-progress", "completed", "on-hold")

Progress = Annotated[int, Field(ge=0, le=100)]


def status_for_progress(progress: int) -> str:
    if progress == 0:
        return "planning"
    if progress == 100:
        return "completed"
    return "in-progress"


class ProjectCreate(WireModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    start_date: UtcDatetime
    end_date: UtcDatetime | None = None
    status: Status = "planning"
    progress: Progress = 0
    team_members: list[str] = Field(default_factory=list)
    technologies: StringList = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)
    category: str | None = None
    budget: float | None = Field(default=None, ge=0)
    client: str | None = None

    @model_validator(mode="after")
    def _dates_in_order(self) -> ProjectCreate:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class ProjectUpdate(WireModel):
    title: str = Field(default=None, min_length=1, max_length=200)
    description: str = Field(default=None, min_length=1, max_length=5000)
    start_date: UtcDatetime = None
    end_date: UtcDatetime | None = None
    status: Status = None
    progress: Progress = None
    team_members: list[str] = None
    technologies: StringList = None
    images: list[ImageRef] = None
    category: str | None = None
    budget: float | None = Field(default=None, ge=0)
    client: str | None = None


class ProgressUpdate(WireModel):
    progress: Progress


class ProjectRecord(RecordModel):
    title: str
    description: str
    start_date: UtcDatetime
    end_date: UtcDatetime | None = None
    status: Status = "planning"
    progress: int = 0
    team_members: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)
    category: str | None = None
    budget: float | None = None
    client: str | None = None


def fallback_projects() -> list[ProjectRecord]:
    return [
        ProjectRecord(
            id="1",
            title="E-commerce Platform",
            description="Modern e-commerce solution with advanced features.",
            status="completed",
            progress=100,
            category="Web Development",
            technologies=["React", "Node.js", "MongoDB"],
            start_date=datetime.datetime(2023, 1, 1),
            end_date=datetime.datetime(2023, 6, 1),
            created_at=datetime.datetime(2023, 1, 1),
            updated_at=datetime.datetime(2023, 1, 1),
        ),
        ProjectRecord(
            id="2",
            title="Mobile Banking App",
            description="Secure mobile banking application.",
            status="in-progress",
            progress=50,
            category="Mobile Development",
            technologies=["React Native", "Node.js", "PostgreSQL"],
            start_date=datetime.datetime(2023, 7, 1),
            created_at=datetime.datetime(2023, 7, 1),
            updated_at=datetime.datetime(2023, 7, 1),
        ),
    ]


PROJECTS = ResourceKind(
    name="projects",
    table=ProjectTable,
    record_model=ProjectRecord,
    create_model=ProjectCreate,
    update_model=ProjectUpdate,
    list_key="projects",
    item_key="project",
    label="Project",
    fallback=fallback_projects,
    filters={"status": ("status", "eq"), "category": ("category", "icontains")},
    order_by=(("created_at", "desc"),),
)
