"""Team members.

Listings show active members only unless ``active`` or ``includeInactive``
is given; deactivated members remain readable by id.  Email is optional but
unique when present; an absent email is stored as NULL and served as ``""``.
"""

from __future__ import annotations

import datetime
import re
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, field_serializer

from showcase.core.kinds import ResourceKind
from showcase.core.orm.base import utcnow
from showcase.core.orm.tables import TeamMemberTable
from showcase.kinds._common import (
    Email,
    OptionalUrl,
    RecordModel,
    StringList,
    UtcDatetime,
    WireModel,
    not_in_future,
)

_PHONE_RE = re.compile(r"^[\d\s()+\-.]+$")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_phone(value: str) -> str:
    if value and not _PHONE_RE.match(value):
        raise ValueError("Please provide a valid phone number")
    return value


OptionalEmail = Annotated[Email | None, BeforeValidator(_blank_to_none)]
Phone = Annotated[str, Field(max_length=20), AfterValidator(_check_phone)]
JoinDate = Annotated[UtcDatetime, AfterValidator(not_in_future)]
Name = Annotated[str, Field(min_length=2, max_length=100)]


class TeamImage(WireModel):
    url: str = ""
    alt: str = ""


class SocialLinks(WireModel):
    linkedin: OptionalUrl = ""
    twitter: OptionalUrl = ""
    github: OptionalUrl = ""


class TeamMemberCreate(WireModel):
    name: Name
    position: Name
    department: str = Field(default="General", max_length=100)
    email: OptionalEmail = None
    phone: Phone = ""
    bio: str = Field(default="", max_length=1000)
    skills: StringList = Field(default_factory=list)
    image: TeamImage = Field(default_factory=TeamImage)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    join_date: JoinDate = Field(default_factory=utcnow)
    is_leader: bool = False
    is_active: bool = True


class TeamMemberUpdate(WireModel):
    name: Name = None
    position: Name = None
    department: str = Field(default=None, max_length=100)
    email: OptionalEmail = None
    phone: Phone = None
    bio: str = Field(default=None, max_length=1000)
    skills: StringList = None
    image: TeamImage = None
    social_links: SocialLinks = None
    join_date: JoinDate = None
    is_leader: bool = None
    is_active: bool = None


class TeamMemberRecord(RecordModel):
    name: str
    position: str
    department: str = "General"
    email: str | None = None
    phone: str | None = ""
    bio: str | None = ""
    skills: list[str] = Field(default_factory=list)
    image: TeamImage = Field(default_factory=TeamImage)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    join_date: UtcDatetime | None = None
    is_leader: bool = False
    is_active: bool = True

    @field_serializer("email", "phone", "bio")
    def _empty_for_none(self, value: str | None) -> str:
        return value or ""


def _default_image_alt(data: dict[str, Any], row: Any | None) -> dict[str, Any]:
    image = data.get("image")
    if image and image.get("url") and not image.get("alt"):
        name = data.get("name") or (row.name if row is not None else "")
        position = data.get("position") or (row.position if row is not None else "")
        data["image"] = {**image, "alt": f"{name} - {position}"}
    return data


_CATALOG = (
    {
        "id": "fallback-1",
        "name": "John Smith",
        "position": "CEO & Founder",
        "department": "Leadership",
        "email": "john.smith@company.com",
        "phone": "+1 (555) 123-4567",
        "bio": (
            "Visionary leader with 15+ years of experience in technology and business strategy. "
            "Passionate about building innovative solutions that make a real difference."
        ),
        "skills": ["Leadership", "Strategy", "Business Development", "Technology Vision"],
        "image": {"url": "/uploads/images/default-avatar-1.jpg", "alt": "John Smith - CEO"},
        "social_links": {
            "linkedin": "https://linkedin.com/in/johnsmith",
            "twitter": "https://twitter.com/johnsmith",
            "github": "",
        },
        "join_date": datetime.datetime(2020, 1, 1),
        "is_leader": True,
    },
    {
        "id": "fallback-2",
        "name": "Sarah Johnson",
        "position": "Chief Technology Officer",
        "department": "Engineering",
        "email": "sarah.johnson@company.com",
        "phone": "+1 (555) 123-4568",
        "bio": (
            "Tech enthusiast and full-stack developer with expertise in scalable architecture and "
            "team leadership. Drives technical excellence across all projects."
        ),
        "skills": [
            "Full-Stack Development",
            "Cloud Architecture",
            "DevOps",
            "Team Leadership",
            "System Design",
        ],
        "image": {"url": "/uploads/images/default-avatar-2.jpg", "alt": "Sarah Johnson - CTO"},
        "social_links": {
            "linkedin": "https://linkedin.com/in/sarahjohnson",
            "twitter": "",
            "github": "https://github.com/sarahjohnson",
        },
        "join_date": datetime.datetime(2020, 3, 15),
        "is_leader": True,
    },
    {
        "id": "fallback-3",
        "name": "Michael Brown",
        "position": "Head of Design",
        "department": "Design",
        "email": "michael.brown@company.com",
        "phone": "+1 (555) 123-4569",
        "bio": (
            "Creative designer passionate about user experience and visual storytelling. "
            "Creates beautiful, functional designs that users love."
        ),
        "skills": ["UI/UX Design", "Prototyping", "Brand Design", "User Research", "Design Systems"],
        "image": {
            "url": "/uploads/images/default-avatar-3.jpg",
            "alt": "Michael Brown - Head of Design",
        },
        "social_links": {
            "linkedin": "https://linkedin.com/in/michaelbrown",
            "twitter": "https://twitter.com/mikedesigns",
            "github": "",
        },
        "join_date": datetime.datetime(2020, 6, 10),
        "is_leader": False,
    },
)


def fallback_team() -> list[TeamMemberRecord]:
    return [
        TeamMemberRecord.model_validate(
            {**entry, "created_at": entry["join_date"], "updated_at": entry["join_date"]}
        )
        for entry in _CATALOG
    ]


TEAM = ResourceKind(
    name="team",
    table=TeamMemberTable,
    record_model=TeamMemberRecord,
    create_model=TeamMemberCreate,
    update_model=TeamMemberUpdate,
    list_key="team",
    item_key="teamMember",
    label="Team member",
    fallback=fallback_team,
    filters={
        "department": ("department", "icontains"),
        "active": ("is_active", "eq"),
        "isLeader": ("is_leader", "eq"),
    },
    order_by=(("is_leader", "desc"), ("join_date", "asc")),
    active_field="is_active",
    active_by_default=True,
    before_write=_default_image_alt,
)
