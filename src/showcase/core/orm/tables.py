"""Table definitions — one table per resource kind, plus administrators.

Nested sub-documents (images, social links, metadata maps, the
customization sections) are stored as JSON columns.  Attribute names match
the snake_case field names of the pydantic models in :mod:`showcase.kinds`
so rows and payloads convert without a mapping table.

Tags:
    showcase, orm, sqlalchemy, tables

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from showcase.core.orm.base import RecordMixin, ShowcaseBase, TimestampMixin, new_id


class AchievementTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "achievements"
    __table_args__ = (
        Index("ix_achievements_date", "date"),
        Index("ix_achievements_category", "category"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    category: Mapped[str] = mapped_column(Text, default="milestone", nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    images: Mapped[list] = mapped_column(JSON, default=list)
    documents: Mapped[list] = mapped_column(JSON, default=list)


class ContentSectionTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "content_sections"

    section: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    title: Mapped[str | None] = mapped_column(Text)
    subtitle: Mapped[str | None] = mapped_column(Text)
    content: Mapped[str | None] = mapped_column(Text)
    images: Mapped[list] = mapped_column(JSON, default=list)
    # "metadata" is reserved on declarative classes
    meta: Mapped[dict] = mapped_column("metadata", JSON, default=dict)


class TeamMemberTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "team_members"
    __table_args__ = (
        Index("ix_team_members_active_department", "is_active", "department"),
        Index("ix_team_members_active_join_date", "is_active", "join_date"),
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(Text, default="General", nullable=False)
    email: Mapped[str | None] = mapped_column(Text, unique=True)
    phone: Mapped[str | None] = mapped_column(Text)
    bio: Mapped[str | None] = mapped_column(Text)
    skills: Mapped[list] = mapped_column(JSON, default=list)
    image: Mapped[dict] = mapped_column(JSON, default=dict)
    social_links: Mapped[dict] = mapped_column(JSON, default=dict)
    join_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    is_leader: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class ProjectTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_status", "status"),
        Index("ix_projects_start_date", "start_date"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    status: Mapped[str] = mapped_column(Text, default="planning", nullable=False)
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    team_members: Mapped[list] = mapped_column(JSON, default=list)
    technologies: Mapped[list] = mapped_column(JSON, default=list)
    images: Mapped[list] = mapped_column(JSON, default=list)
    category: Mapped[str | None] = mapped_column(Text)
    budget: Mapped[float | None] = mapped_column(Float)
    client: Mapped[str | None] = mapped_column(Text)


class ServiceTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "services"
    __table_args__ = (Index("ix_services_active_order", "active", "display_order"),)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(Text, default="FiCode", nullable=False)
    features: Mapped[list] = mapped_column(JSON, default=list)
    price: Mapped[str] = mapped_column(Text, nullable=False)
    popular: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    gradient: Mapped[str] = mapped_column(Text, default="from-blue-500 to-purple-600", nullable=False)
    order: Mapped[int] = mapped_column("display_order", Integer, default=0, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    category: Mapped[str] = mapped_column(Text, default="development", nullable=False)
    duration: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    images: Mapped[list] = mapped_column(JSON, default=list)


class ContactTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "contacts"
    __table_args__ = (Index("ix_contacts_status", "status"),)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    query_type: Mapped[str] = mapped_column(Text, default="general", nullable=False)
    urgency: Mapped[str] = mapped_column(Text, default="medium", nullable=False)
    status: Mapped[str] = mapped_column(Text, default="new", nullable=False)
    read_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)


class SiteCustomizationTable(RecordMixin, TimestampMixin, ShowcaseBase):
    __tablename__ = "site_customizations"

    logo: Mapped[dict] = mapped_column(JSON, default=dict)
    favicon: Mapped[dict] = mapped_column(JSON, default=dict)
    fonts: Mapped[dict] = mapped_column(JSON, default=dict)
    colors: Mapped[dict] = mapped_column(JSON, default=dict)
    background_image: Mapped[dict] = mapped_column(JSON, default=dict)
    custom_css: Mapped[str] = mapped_column(Text, default="", nullable=False)
    social_media: Mapped[dict] = mapped_column(JSON, default=dict)
    contact: Mapped[dict] = mapped_column(JSON, default=dict)
    seo: Mapped[dict] = mapped_column(JSON, default=dict)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)


class AdminTable(TimestampMixin, ShowcaseBase):
    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, default="admin", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


__all__ = [
    "AchievementTable",
    "AdminTable",
    "ContactTable",
    "ContentSectionTable",
    "ProjectTable",
    "ServiceTable",
    "SiteCustomizationTable",
    "TeamMemberTable",
]
