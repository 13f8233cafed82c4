"""Session-scoped data access for one resource kind.

Provides :class:`KindRepository`, which turns a :class:`ResourceKind`
descriptor plus a SQLAlchemy session into the handful of queries the
reader and writer need: counting, filtered/paged listing, lookups and
row <-> record conversion.  It never commits; transaction boundaries belong
to the caller.

Tags:
    showcase, repository, sqlalchemy, query

Doc-Types:
    api-reference
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement, func, inspect, select
from sqlalchemy.orm import Session

from showcase.core.kinds import ResourceKind
from showcase.core.orm.session import row_to_dict


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Pagination params used by list operations (1-based pages)."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class PageInfo:
    """Pagination block of a listing envelope."""

    page: int
    pages: int
    total: int
    limit: int

    @classmethod
    def of(cls, request: PageRequest, total: int) -> PageInfo:
        pages = max(1, math.ceil(total / request.limit)) if request.limit else 1
        return cls(page=request.page, pages=pages, total=total, limit=request.limit)

    @classmethod
    def single_page(cls, count: int) -> PageInfo:
        """Everything on one page (fallback and freshly provisioned sets)."""
        return cls(page=1, pages=1, total=count, limit=count)

    def to_dict(self) -> dict[str, int]:
        return {"page": self.page, "pages": self.pages, "total": self.total, "limit": self.limit}


def column_keys(table: type[Any]) -> set[str]:
    """Attribute names of the mapped columns of *table*."""
    return {attr.key for attr in inspect(table).column_attrs}


def to_columns(kind: ResourceKind, data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys that are not columns of the kind's table."""
    keys = column_keys(kind.table)
    return {k: v for k, v in data.items() if k in keys}


class KindRepository:
    """Queries for one kind inside one session."""

    def __init__(self, session: Session, kind: ResourceKind) -> None:
        self.session = session
        self.kind = kind
        self.table = kind.table

    # ------------------------------------------------------------------ #
    # Conversion
    # ------------------------------------------------------------------ #

    def to_record(self, row: Any) -> BaseModel:
        return self.kind.record_model.model_validate(row_to_dict(row))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def conditions(
        self,
        filters: dict[str, Any] | None = None,
        *,
        include_inactive: bool = False,
    ) -> list[ColumnElement[bool]]:
        """WHERE clauses for *filters*.  Skips ``None`` values and unknown names."""
        clauses: list[ColumnElement[bool]] = []
        filters = filters or {}
        for name, value in filters.items():
            if value is None or value == "" or name not in self.kind.filters:
                continue
            attr, op = self.kind.filters[name]
            column = getattr(self.table, attr)
            if op == "icontains":
                clauses.append(column.ilike(f"%{value}%"))
            else:
                clauses.append(column == value)

        active = self.kind.active_field
        if active and self.kind.active_by_default and not include_inactive:
            filtered_on_active = any(
                self.kind.filters.get(name, ("", "eq"))[0] == active and value is not None
                for name, value in filters.items()
            )
            if not filtered_on_active:
                clauses.append(getattr(self.table, active).is_(True))
        return clauses

    def _ordering(self) -> list[Any]:
        out = []
        for attr, direction in self.kind.order_by:
            column = getattr(self.table, attr)
            out.append(column.desc() if direction == "desc" else column.asc())
        return out

    def count(self, clauses: list[ColumnElement[bool]] | None = None) -> int:
        stmt = select(func.count()).select_from(self.table)
        for clause in clauses or []:
            stmt = stmt.where(clause)
        return int(self.session.execute(stmt).scalar_one())

    def list(
        self,
        filters: dict[str, Any] | None,
        page: PageRequest,
        *,
        include_inactive: bool = False,
    ) -> tuple[int, list[Any]]:
        """Return ``(total, rows)`` for one page of matching rows."""
        clauses = self.conditions(filters, include_inactive=include_inactive)
        total = self.count(clauses)
        stmt = select(self.table).where(*clauses).order_by(*self._ordering())
        stmt = stmt.offset(page.offset).limit(page.limit)
        rows = list(self.session.execute(stmt).scalars())
        return total, rows

    def all(self, clauses: list[ColumnElement[bool]] | None = None) -> list[Any]:
        stmt = select(self.table).where(*(clauses or [])).order_by(*self._ordering())
        return list(self.session.execute(stmt).scalars())

    def get(self, record_id: str) -> Any | None:
        return self.session.get(self.table, record_id)

    def first(self, key: str | None = None) -> Any | None:
        """The canonical singleton row (by ``lookup_field`` when the kind has one)."""
        stmt = select(self.table)
        if self.kind.lookup_field is not None:
            stmt = stmt.where(getattr(self.table, self.kind.lookup_field) == key)
        stmt = stmt.order_by(self.table.created_at.asc()).limit(1)
        return self.session.execute(stmt).scalars().first()

    # ------------------------------------------------------------------ #
    # Mutation (no commit)
    # ------------------------------------------------------------------ #

    def add(self, data: dict[str, Any]) -> Any:
        row = self.table(**to_columns(self.kind, data))
        self.session.add(row)
        return row

    def apply(self, row: Any, data: dict[str, Any]) -> Any:
        for key, value in to_columns(self.kind, data).items():
            setattr(row, key, value)
        return row


__all__ = [
    "KindRepository",
    "PageInfo",
    "PageRequest",
    "column_keys",
    "to_columns",
]
