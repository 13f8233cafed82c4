"""Services offered on the site.

At most one service is ``popular``: marking one clears the flag on all the
others in the same transaction.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from sqlalchemy import update
from sqlalchemy.orm import Session

from showcase.core.catalog import CATALOG_TIMESTAMP
from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import ServiceTable
from showcase.kinds._common import ImageRef, RecordModel, StringList, WireModel

Category = Literal["development", "design", "consulting", "security", "optimization", "other"]


class ServiceCreate(WireModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    price: str = Field(min_length=1)
    icon: str = "FiCode"
    features: StringList = Field(default_factory=list)
    popular: bool = False
    gradient: str = "from-blue-500 to-purple-600"
    order: int = 0
    active: bool = True
    category: Category = "development"
    duration: str | None = None
    tags: StringList = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)


class ServiceUpdate(WireModel):
    title: str = Field(default=None, min_length=1, max_length=100)
    description: str = Field(default=None, min_length=1, max_length=1000)
    price: str = Field(default=None, min_length=1)
    icon: str = None
    features: StringList = None
    popular: bool = None
    gradient: str = None
    order: int = None
    active: bool = None
    category: Category = None
    duration: str | None = None
    tags: StringList = None
    images: list[ImageRef] = None


class ServiceOrder(WireModel):
    id: str = Field(min_length=1)
    order: int


class ReorderRequest(WireModel):
    service_orders: list[ServiceOrder] = Field(min_length=1)


class ServiceRecord(RecordModel):
    title: str
    description: str
    price: str
    icon: str = "FiCode"
    features: list[str] = Field(default_factory=list)
    popular: bool = False
    gradient: str = "from-blue-500 to-purple-600"
    order: int = 0
    active: bool = True
    category: Category = "development"
    duration: str | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)


def _single_popular(session: Session, row: Any, data: dict[str, Any]) -> None:
    if data.get("popular"):
        session.execute(
            update(ServiceTable).where(ServiceTable.id != row.id).values(popular=False)
        )


_CATALOG = (
    ("Web Development",
     "Custom web applications built with modern technologies like React, Node.js, and cloud infrastructure.",
     "FiCode", ["Responsive Design", "SEO Optimization", "Fast Loading", "Secure"],
     "Starting at $2,999", True, "from-blue-500 to-purple-600", "development", "4-8 weeks",
     ["React", "Node.js", "MongoDB"]),
    ("Mobile App Development",
     "Native and cross-platform mobile applications for iOS and Android with seamless user experience.",
     "FiSmartphone", ["Cross-Platform", "Native Performance", "App Store Ready", "Push Notifications"],
     "Starting at $4,999", False, "from-green-500 to-blue-600", "development", "6-12 weeks",
     ["React Native", "Flutter", "iOS", "Android"]),
    ("UI/UX Design",
     "Beautiful, intuitive user interfaces designed to engage your users and drive conversions.",
     "FiPenTool", ["User Research", "Wireframing", "Prototyping", "Design System"],
     "Starting at $1,999", False, "from-pink-500 to-orange-500", "design", "3-6 weeks",
     ["Figma", "Adobe XD", "Sketch"]),
    ("Cloud Solutions",
     "Scalable cloud infrastructure and deployment solutions for your applications and services.",
     "FiCloud", ["Auto Scaling", "High Availability", "Security", "Monitoring"],
     "Starting at $999", False, "from-cyan-500 to-blue-500", "optimization", "2-4 weeks",
     ["AWS", "Google Cloud", "Azure"]),
    ("Digital Marketing",
     "Comprehensive digital marketing strategies to grow your online presence and reach.",
     "FiTrendingUp", ["SEO", "Social Media", "Content Marketing", "Analytics"],
     "Starting at $1,499", False, "from-yellow-500 to-red-500", "consulting", "4-8 weeks",
     ["SEO", "Google Ads", "Social Media"]),
    ("Cybersecurity",
     "Protect your business with comprehensive security audits, monitoring, and implementation.",
     "FiShield", ["Security Audit", "Threat Monitoring", "Compliance", "Training"],
     "Starting at $2,499", False, "from-red-500 to-purple-600", "security", "3-6 weeks",
     ["Security Audit", "Penetration Testing", "Compliance"]),
)


def fallback_services() -> list[ServiceRecord]:
    return [
        ServiceRecord(
            id=f"fallback-service-{n}",
            title=title,
            description=description,
            icon=icon,
            features=list(features),
            price=price,
            popular=popular,
            gradient=gradient,
            category=category,
            duration=duration,
            tags=list(tags),
            order=n,
            created_at=CATALOG_TIMESTAMP,
            updated_at=CATALOG_TIMESTAMP,
        )
        for n, (title, description, icon, features, price, popular, gradient, category, duration, tags)
        in enumerate(_CATALOG, start=1)
    ]


SERVICES = ResourceKind(
    name="services",
    table=ServiceTable,
    record_model=ServiceRecord,
    create_model=ServiceCreate,
    update_model=ServiceUpdate,
    list_key="services",
    item_key="service",
    label="Service",
    fallback=fallback_services,
    filters={
        "category": ("category", "eq"),
        "popular": ("popular", "eq"),
        "active": ("active", "eq"),
    },
    order_by=(("order", "asc"), ("created_at", "desc")),
    active_field="active",
    after_write=_single_popular,
)
