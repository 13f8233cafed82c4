"""Declarative base and mixins shared by every showcase table.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map`` so
mapped columns can use plain Python types.

Mixins
------
* **RecordMixin**    — string ``id`` primary key plus the nullable, unique
  ``seed_key`` that makes auto-provisioning idempotent.
* **TimestampMixin** — ``created_at`` / ``updated_at`` set from Python so the
  values are portable across dialects.
"""

from __future__ import annotations

import datetime
import uuid

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp (SQLite stores no offsets)."""
    return datetime.datetime.now(datetime.UTC).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex


class ShowcaseBase(DeclarativeBase):
    """Shared declarative base for every showcase table.

    * ``str``   → ``Text``
    * ``int``   → ``Integer``
    * ``float`` → ``Float``
    * ``bool``  → ``Boolean``
    * ``datetime.datetime`` → ``DateTime``
    * ``dict`` / ``list``  → ``JSON``
    """

    type_annotation_map = {
        str: Text,
        int: Integer,
        float: Float,
        bool: Boolean,
        datetime.datetime: DateTime,
        dict: JSON,
        list: JSON,
    }


class RecordMixin:
    """Primary key and provisioning seed key.

    ``seed_key`` is only set on rows persisted from the fallback catalog.
    Its unique constraint is what turns a second, concurrent provisioning
    attempt into a duplicate-key error instead of a duplicate row.
    """

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    seed_key: Mapped[str | None] = mapped_column(Text, unique=True, default=None)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at``."""

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
