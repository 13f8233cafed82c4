"""
Resource kind descriptors and the registry that names them.

A :class:`ResourceKind` is the only thing the generic reader and writer
know about a kind: which table holds it, which pydantic models validate and
serialise it, which catalog backs it while the store is down, and how its
listings are filtered and ordered.  Adding a kind means registering one
descriptor; no per-kind reader/writer code exists.

Examples:
    >>> registry = KindRegistry()
    >>> registry.register(achievements_kind)          # doctest: +SKIP
    >>> registry.get_kind("achievements").list_key    # doctest: +SKIP
    'achievements'
    >>> registry.get_kind("nope")                     # doctest: +SKIP
    Traceback (most recent call last):
    NotFound: Unknown resource kind: nope

Tags:
    showcase, kinds, registry, descriptor

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel
from sqlalchemy.orm import Session

from showcase.core.errors import NotFound

FilterOp = Literal["eq", "icontains"]

BeforeWrite = Callable[[dict[str, Any], Any | None], dict[str, Any]]
AfterWrite = Callable[[Session, Any, dict[str, Any]], None]


def _no_fallback() -> list[BaseModel]:
    return []


def _seed_key_from_id(record: BaseModel) -> str:
    return str(record.id)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class ResourceKind:
    """Descriptor for one resource kind.

    Attributes:
        name: Registry key, also the path segment under ``/api``.
        table: SQLAlchemy mapped class holding the records.
        record_model: Full record as served (camelCase aliases on the wire).
        create_model: Payload accepted on create.
        update_model: Partial payload accepted on update (all optional).
        list_key: Envelope key for listings (``data.<list_key>``).
        item_key: Envelope key for single records (``data.<item_key>``).
        label: Human-readable singular used in messages.
        fallback: Zero-arg callable returning the frozen catalog.
        filters: Query filter name -> (attribute, operator).
        order_by: Default ordering as (attribute, "asc" | "desc") pairs.
        active_field: Soft-delete flag attribute, if the kind has one.
        active_by_default: Listings hide inactive records unless asked.
        lookup_field: Canonical singleton key attribute (``section``).
        singleton: The kind holds exactly one document.
        before_write: ``(data, existing_row | None) -> data`` normaliser.
        after_write: ``(session, row, data)`` side effects in the same
            transaction.
        seed_key: Maps a catalog record to its provisioning seed key.
    """

    name: str
    table: type[Any]
    record_model: type[BaseModel]
    create_model: type[BaseModel]
    update_model: type[BaseModel]
    list_key: str
    item_key: str
    label: str = "Record"
    fallback: Callable[[], list[BaseModel]] = _no_fallback
    filters: Mapping[str, tuple[str, FilterOp]] = field(default_factory=dict)
    order_by: tuple[tuple[str, str], ...] = (("created_at", "desc"),)
    active_field: str | None = None
    active_by_default: bool = False
    lookup_field: str | None = None
    singleton: bool = False
    before_write: BeforeWrite | None = None
    after_write: AfterWrite | None = None
    seed_key: Callable[[BaseModel], str] = _seed_key_from_id

    def serialize(self, record: BaseModel) -> dict[str, Any]:
        """Wire form of a record (camelCase, JSON-safe)."""
        return record.model_dump(by_alias=True, mode="json")


class KindRegistry:
    """Name -> :class:`ResourceKind` mapping."""

    def __init__(self) -> None:
        self._kinds: dict[str, ResourceKind] = {}

    def register(self, kind: ResourceKind) -> ResourceKind:
        if kind.name in self._kinds:
            raise ValueError(f"Resource kind already registered: {kind.name}")
        self._kinds[kind.name] = kind
        return kind

    def get_kind(self, name: str) -> ResourceKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise NotFound(f"Unknown resource kind: {name}") from None

    def names(self) -> list[str]:
        return list(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[ResourceKind]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)


__all__ = ["AfterWrite", "BeforeWrite", "FilterOp", "KindRegistry", "ResourceKind"]
