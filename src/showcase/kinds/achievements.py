"""Achievements: awards, milestones, certifications."""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import Field

from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import AchievementTable
from showcase.kinds._common import DocumentRef, ImageRef, RecordModel, UtcDatetime, WireModel

Category = Literal["award", "milestone", "certification", "recognition"]


class AchievementCreate(WireModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    date: UtcDatetime
    category: Category = "milestone"
    featured: bool = False
    images: list[ImageRef] = Field(default_factory=list)
    documents: list[DocumentRef] = Field(default_factory=list)


class AchievementUpdate(WireModel):
    title: str = Field(default=None, min_length=1, max_length=200)
    description: str = Field(default=None, min_length=1, max_length=2000)
    date: UtcDatetime = None
    category: Category = None
    featured: bool = None
    images: list[ImageRef] = None
    documents: list[DocumentRef] = None


class AchievementRecord(RecordModel):
    title: str
    description: str
    date: UtcDatetime
    category: Category = "milestone"
    featured: bool = False
    images: list[ImageRef] = Field(default_factory=list)
    documents: list[DocumentRef] = Field(default_factory=list)


_CATALOG = (
    ("673d1234567890abcdef0001", "Company Founded",
     "Successfully launched our company with a vision to innovate and transform the digital landscape.",
     datetime.datetime(2020, 1, 1), "milestone", True),
    ("673d1234567890abcdef0002", "First Major Client",
     "Secured our first enterprise-level client contract worth $100K.",
     datetime.datetime(2020, 6, 1), "milestone", False),
    ("673d1234567890abcdef0003", "Best Innovation Award 2023",
     "Received the prestigious Best Innovation Award for our groundbreaking AI solutions.",
     datetime.datetime(2023, 1, 15), "award", True),
    ("673d1234567890abcdef0004", "ISO 27001 Certification",
     "Successfully obtained ISO 27001 certification for information security management.",
     datetime.datetime(2023, 6, 10), "certification", False),
    ("673d1234567890abcdef0005", "500+ Projects Milestone",
     "Reached the remarkable milestone of 500 successfully completed projects.",
     datetime.datetime(2024, 1, 1), "milestone", True),
)


def fallback_achievements() -> list[AchievementRecord]:
    return [
        AchievementRecord(
            id=id_,
            title=title,
            description=description,
            date=date,
            category=category,
            featured=featured,
            created_at=date,
            updated_at=date,
        )
        for id_, title, description, date, category, featured in _CATALOG
    ]


ACHIEVEMENTS = ResourceKind(
    name="achievements",
    table=AchievementTable,
    record_model=AchievementRecord,
    create_model=AchievementCreate,
    update_model=AchievementUpdate,
    list_key="achievements",
    item_key="achievement",
    label="Achievement",
    fallback=fallback_achievements,
    filters={"category": ("category", "eq"), "featured": ("featured", "eq")},
    order_by=(("date", "desc"),),
)
