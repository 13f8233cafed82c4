"""Content sections: the editable copy of hero, about, services and home."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from showcase.core.catalog import CATALOG_TIMESTAMP
from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import ContentSectionTable
from showcase.kinds._common import ImageRef, RecordModel, WireModel

Section = Literal["hero", "about", "services", "home"]
SECTIONS: tuple[str, ...] = ("hero", "about", "services", "home")


class ContentCreate(WireModel):
    section: Section
    title: str | None = Field(default=None, max_length=200)
    subtitle: str | None = Field(default=None, max_length=300)
    content: str | None = Field(default=None, max_length=10000)
    images: list[ImageRef] = Field(default_factory=list)
    meta: dict[str, str] = Field(default_factory=dict, alias="metadata")


class ContentUpdate(WireModel):
    title: str | None = Field(default=None, max_length=200)
    subtitle: str | None = Field(default=None, max_length=300)
    content: str | None = Field(default=None, max_length=10000)
    images: list[ImageRef] = None
    meta: dict[str, str] = Field(default=None, alias="metadata")


class ContentRecord(RecordModel):
    section: Section
    title: str | None = None
    subtitle: str | None = None
    content: str | None = None
    images: list[ImageRef] = Field(default_factory=list)
    meta: dict[str, str] = Field(default_factory=dict, alias="metadata")


_CATALOG: dict[str, dict] = {
    "hero": {
        "title": "Building the Future Together",
        "subtitle": "Innovation Through Excellence",
        "content": (
            "We create innovative solutions that drive success and build lasting partnerships "
            "with our clients worldwide. Our team is dedicated to transforming ideas into reality "
            "with cutting-edge technology and creative expertise."
        ),
        "meta": {"buttonText": "Get Started", "buttonLink": "/contact", "backgroundStyle": "gradient"},
    },
    "about": {
        "title": "About Our Company",
        "subtitle": "Excellence in Every Project",
        "content": (
            "We are a professional technology company dedicated to delivering excellence in all "
            "our projects and services. With years of experience and a passionate team, we help "
            "businesses achieve their digital transformation goals through innovative solutions "
            "and strategic partnerships."
        ),
        "meta": {
            "mission": "To empower businesses through innovative technology",
            "vision": "A world where technology seamlessly enhances every business operation",
            "values": "Innovation, Integrity, Excellence, Collaboration",
        },
    },
    "services": {
        "title": "Our Premium Services",
        "subtitle": "Comprehensive Solutions for Your Business",
        "content": (
            "We offer a wide range of services including web development, mobile app development, "
            "cloud solutions, digital marketing, and IT consulting. Our experienced team works "
            "closely with clients to understand their unique needs and deliver customized "
            "solutions that drive growth and success."
        ),
        "meta": {
            "highlight": "Full-stack development expertise",
            "specialties": "React, Node.js, Cloud Architecture, Mobile Apps",
            "approach": "Agile methodology with continuous delivery",
        },
    },
    "home": {
        "title": "Welcome to Our Digital World",
        "subtitle": "Your Success is Our Mission",
        "content": (
            "We provide cutting-edge technology solutions to help your business grow and succeed "
            "in the digital world. From concept to deployment, our comprehensive services ensure "
            "your project exceeds expectations and delivers measurable results."
        ),
        "meta": {
            "ctaText": "Start Your Project",
            "ctaLink": "/contact",
            "features": "Expert Team, Modern Tech Stack, 24/7 Support",
        },
    },
}


def fallback_content() -> list[ContentRecord]:
    return [
        ContentRecord(
            id=f"fallback-{section}",
            section=section,
            created_at=CATALOG_TIMESTAMP,
            updated_at=CATALOG_TIMESTAMP,
            **{k: (dict(v) if isinstance(v, dict) else v) for k, v in fields.items()},
        )
        for section, fields in _CATALOG.items()
    ]


def _section_key(record: ContentRecord) -> str:
    return f"section:{record.section}"


CONTENT = ResourceKind(
    name="content",
    table=ContentSectionTable,
    record_model=ContentRecord,
    create_model=ContentCreate,
    update_model=ContentUpdate,
    list_key="content",
    item_key="content",
    label="Content",
    fallback=fallback_content,
    filters={"section": ("section", "eq")},
    order_by=(("section", "asc"),),
    lookup_field="section",
    seed_key=_section_key,
)
