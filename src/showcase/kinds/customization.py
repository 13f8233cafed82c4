"""Site customization: the single document holding branding and SEO settings.

Updates merge each provided section into the stored one (a partial
``colors`` update keeps the other colors) and bump ``version`` so clients
can bust caches.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from showcase.core.catalog import CATALOG_TIMESTAMP
from showcase.core.kinds import ResourceKind
from showcase.core.orm.tables import SiteCustomizationTable
from showcase.kinds._common import RecordModel, WireModel

FontFamily = Literal[
    "Inter", "Roboto", "Open Sans", "Lato", "Montserrat", "Poppins", "Nunito", "Source Sans Pro"
]
HeadingWeight = Literal["300", "400", "500", "600", "700", "800", "900"]
BodyWeight = Literal["300", "400", "500", "600", "700"]
Position = Literal[
    "center", "top", "bottom", "left", "right",
    "top-left", "top-right", "bottom-left", "bottom-right",
]
Size = Literal["cover", "contain", "auto", "100%"]
Repeat = Literal["no-repeat", "repeat", "repeat-x", "repeat-y"]

AVAILABLE_FONTS: tuple[dict[str, str], ...] = tuple(
    {"name": family, "value": family, "category": "Sans Serif"}
    for family in (
        "Inter", "Roboto", "Open Sans", "Lato", "Montserrat", "Poppins", "Nunito", "Source Sans Pro"
    )
)


class Logo(WireModel):
    url: str = ""
    alt: str = "Company Logo"
    width: int = Field(default=120, gt=0)
    height: int = Field(default=40, gt=0)


class Favicon(WireModel):
    url: str = ""


class Fonts(WireModel):
    primary: FontFamily = "Inter"
    secondary: FontFamily = "Inter"
    heading_weight: HeadingWeight = "600"
    body_weight: BodyWeight = "400"


class Colors(WireModel):
    primary: str = "#3b82f6"
    secondary: str = "#64748b"
    accent: str = "#8b5cf6"
    background: str = "#ffffff"
    text: str = "#1f2937"
    text_secondary: str = "#6b7280"


class BackgroundImage(WireModel):
    url: str = ""
    opacity: float = Field(default=0.1, ge=0, le=1)
    position: Position = "center"
    size: Size = "cover"
    repeat: Repeat = "no-repeat"


class SocialMedia(WireModel):
    linkedin: str = ""
    twitter: str = ""
    facebook: str = ""
    instagram: str = ""
    youtube: str = ""
    github: str = ""


class ContactInfo(WireModel):
    phone: str = ""
    email: str = ""
    address: str = ""


class Seo(WireModel):
    title: str = "ZEYA-TECH"
    description: str = "Professional company website"
    keywords: str = "company, business, professional"


class CustomizationUpdate(WireModel):
    logo: Logo = None
    favicon: Favicon = None
    fonts: Fonts = None
    colors: Colors = None
    background_image: BackgroundImage = None
    custom_css: str = Field(default=None, alias="customCSS")
    social_media: SocialMedia = None
    contact: ContactInfo = None
    seo: Seo = None


class CustomizationRecord(RecordModel):
    logo: Logo = Field(default_factory=Logo)
    favicon: Favicon = Field(default_factory=Favicon)
    fonts: Fonts = Field(default_factory=Fonts)
    colors: Colors = Field(default_factory=Colors)
    background_image: BackgroundImage = Field(default_factory=BackgroundImage)
    custom_css: str = Field(default="", alias="customCSS")
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    seo: Seo = Field(default_factory=Seo)
    version: int = 1


def merge_sections(data: dict[str, Any], row: Any | None) -> dict[str, Any]:
    """Shallow-merge each provided section into the stored one; bump ``version``."""
    if row is None:
        return data
    merged: dict[str, Any] = {}
    for key, value in data.items():
        current = getattr(row, key, None)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    merged["version"] = (row.version or 0) + 1
    return merged


def fallback_customization() -> list[CustomizationRecord]:
    return [
        CustomizationRecord(
            id="default-customization",
            created_at=CATALOG_TIMESTAMP,
            updated_at=CATALOG_TIMESTAMP,
        )
    ]


CUSTOMIZATION = ResourceKind(
    name="customization",
    table=SiteCustomizationTable,
    record_model=CustomizationRecord,
    create_model=CustomizationUpdate,
    update_model=CustomizationUpdate,
    list_key="customizations",
    item_key="customization",
    label="Customization",
    fallback=fallback_customization,
    singleton=True,
    before_write=merge_sections,
    seed_key=lambda record: "site-customization",
)
