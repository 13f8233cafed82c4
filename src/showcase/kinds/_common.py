"""Shared pydantic building blocks for the resource kind schemas.

All wire models use camelCase aliases (``joinDate``, ``isActive``) while the
Python attribute names stay snake_case and match the table columns, so a
``model_dump()`` can be handed to the repository as-is.
"""

from __future__ import annotations

import datetime
import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from showcase.core.orm.base import utcnow


def _to_naive_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is not None:
        value = value.astimezone(datetime.UTC).replace(tzinfo=None)
    return value


UtcDatetime = Annotated[datetime.datetime, AfterValidator(_to_naive_utc)]

_URL_RE = re.compile(r"^https?://\S+$", re.IGNORECASE)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def check_url(value: str) -> str:
    value = value.strip()
    if value and not _URL_RE.match(value):
        raise ValueError("Must be a valid URL")
    return value


def check_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Please provide a valid email")
    return value


def not_in_future(value: datetime.datetime) -> datetime.datetime:
    if value > utcnow():
        raise ValueError("Date cannot be in the future")
    return value


def clean_string_list(values: list[str]) -> list[str]:
    """Trim, drop empties, de-duplicate (first occurrence wins)."""
    out: list[str] = []
    for v in values:
        v = v.strip()
        if v and v not in out:
            out.append(v)
    return out


Email = Annotated[str, AfterValidator(check_email)]
OptionalUrl = Annotated[str, AfterValidator(check_url)]
StringList = Annotated[list[str], AfterValidator(clean_string_list)]


class WireModel(BaseModel):
    """Base for every payload and record model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ImageRef(WireModel):
    url: str
    alt: str = ""
    caption: str = ""


class DocumentRef(WireModel):
    url: str
    name: str = ""
    type: str = ""


class RecordModel(WireModel):
    """Fields every stored record carries."""

    id: str
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None


__all__ = [
    "DocumentRef",
    "Email",
    "ImageRef",
    "OptionalUrl",
    "RecordModel",
    "StringList",
    "UtcDatetime",
    "WireModel",
    "check_email",
    "check_url",
    "clean_string_list",
    "not_in_future",
]
