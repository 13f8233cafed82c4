"""
Availability-aware reader — one generic read path for every resource kind.

Manifesto:
    A read never fails just because the store is down.  Callers always get
    records plus a provenance tag:

    * ``fallback`` — the store is unreachable (or the query failed); the
      static catalog was served instead.
    * ``created``  — the kind was empty, so the catalog was persisted and
      the new rows were returned.
    * ``database`` — ordinary stored rows.

    "Never connected" and "query failed" look the same to the caller and
    differ only in the logs (``fallback_served`` vs ``store_query_failed``).

Architecture:
    ::

        read_many(kind, filters, page)
            │
            ├─ probe unavailable ─────────────► catalog, source=fallback
            ├─ count/query raises ────────────► catalog, source=fallback (logged)
            ├─ unfiltered count == 0 ─► provision(kind)
            │        ├─ created (no conflicts) ► new rows, source=created
            │        ├─ conflicts / partial ───► re-query, created|database
            │        └─ all failed ────────────► catalog, source=fallback
            └─ otherwise ─────────────────────► page of rows, source=database

Examples:
    >>> reader = AvailabilityAwareReader(StaticProbe(False), factory, writer)  # doctest: +SKIP
    >>> result = reader.read_many(achievements_kind)                           # doctest: +SKIP
    >>> result.source, result.pagination.total                                 # doctest: +SKIP
    (<Source.FALLBACK: 'fallback'>, 5)

Tags:
    showcase, reader, fallback, provisioning

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from showcase.core.catalog import find_fallback, get_fallback
from showcase.core.errors import NotFound
from showcase.core.kinds import ResourceKind
from showcase.core.logging import get_logger
from showcase.core.probe import ConnectivityProbe
from showcase.core.repository import KindRepository, PageInfo, PageRequest
from showcase.core.writer import AvailabilityAwareWriter, SeedOutcome

logger = get_logger(__name__)

T = TypeVar("T")

MSG_UNAVAILABLE = "Using fallback data - database not connected"
MSG_QUERY_FAILED = "Using fallback data due to database error"
MSG_PROVISION_FAILED = "Using fallback data - could not create in database"


class Source(str, Enum):
    """Provenance tag attached to every read response."""

    DATABASE = "database"
    FALLBACK = "fallback"
    CREATED = "created"


@dataclass
class ReadManyResult:
    records: list[BaseModel]
    pagination: PageInfo
    source: Source
    message: str | None = None


@dataclass
class ReadOneResult:
    record: BaseModel
    source: Source
    message: str | None = None


@dataclass
class ProvisionReport:
    """What happened when the catalog for one kind was persisted."""

    kind: str
    created: list[BaseModel] = field(default_factory=list)
    conflicts: int = 0
    failures: int = 0

    @property
    def attempted(self) -> int:
        return len(self.created) + self.conflicts + self.failures

    @property
    def all_failed(self) -> bool:
        return self.attempted > 0 and self.failures == self.attempted


class AvailabilityAwareReader:
    """Reads with fallback substitution and first-read provisioning."""

    def __init__(
        self,
        probe: ConnectivityProbe,
        session_factory: Callable[[], Session],
        writer: AvailabilityAwareWriter,
    ) -> None:
        self._probe = probe
        self._session_factory = session_factory
        self._writer = writer

    # ------------------------------------------------------------------ #
    # Listing
    # ------------------------------------------------------------------ #

    def read_many(
        self,
        kind: ResourceKind,
        filters: dict[str, Any] | None = None,
        page: PageRequest | None = None,
        *,
        include_inactive: bool = False,
    ) -> ReadManyResult:
        page = page or PageRequest()
        if not self._probe.is_available():
            logger.info("fallback_served", kind=kind.name, reason="store_unavailable")
            return self._fallback_many(kind, MSG_UNAVAILABLE)

        try:
            if self._count_all(kind) == 0:
                return self._provision_many(kind, filters, page, include_inactive)
            return self._query_many(kind, filters, page, include_inactive, Source.DATABASE)
        except SQLAlchemyError as e:
            logger.warning("store_query_failed", kind=kind.name, error=str(e))
            return self._fallback_many(kind, MSG_QUERY_FAILED)

    def _count_all(self, kind: ResourceKind) -> int:
        with self._session_factory() as session:
            stmt = select(func.count()).select_from(kind.table)
            return int(session.execute(stmt).scalar_one())

    def _query_many(
        self,
        kind: ResourceKind,
        filters: dict[str, Any] | None,
        page: PageRequest,
        include_inactive: bool,
        source: Source,
        message: str | None = None,
    ) -> ReadManyResult:
        with self._session_factory() as session:
            repo = KindRepository(session, kind)
            total, rows = repo.list(filters, page, include_inactive=include_inactive)
            records = [repo.to_record(r) for r in rows]
        return ReadManyResult(records, PageInfo.of(page, total), source, message)

    def _fallback_many(self, kind: ResourceKind, message: str) -> ReadManyResult:
        records = get_fallback(kind)
        return ReadManyResult(records, PageInfo.single_page(len(records)), Source.FALLBACK, message)

    def _provision_many(
        self,
        kind: ResourceKind,
        filters: dict[str, Any] | None,
        page: PageRequest,
        include_inactive: bool,
    ) -> ReadManyResult:
        report = self.provision(kind)
        if report.attempted == 0:
            # nothing to seed (e.g. contacts): an empty kind is just empty
            return ReadManyResult([], PageInfo.of(page, 0), Source.DATABASE)
        if report.all_failed:
            return self._fallback_many(kind, MSG_PROVISION_FAILED)

        message = f"Default {kind.label.lower()} records created successfully"
        if report.created and not report.conflicts and not report.failures:
            return ReadManyResult(
                report.created,
                PageInfo.single_page(len(report.created)),
                Source.CREATED,
                message,
            )
        # another request provisioned concurrently, or some items failed
        source = Source.CREATED if report.created else Source.DATABASE
        return self._query_many(
            kind,
            filters,
            page,
            include_inactive,
            source,
            message if report.created else None,
        )

    def provision(self, kind: ResourceKind) -> ProvisionReport:
        """Persist every catalog record of *kind*, one transaction each."""
        report = ProvisionReport(kind=kind.name)
        for record in get_fallback(kind):
            result = self._writer.persist_seed(kind, record)
            if result.outcome is SeedOutcome.CREATED and result.record is not None:
                report.created.append(result.record)
            elif result.outcome is SeedOutcome.BENIGN_CONFLICT:
                report.conflicts += 1
            else:
                report.failures += 1
        logger.info(
            "provision_complete",
            kind=kind.name,
            created=len(report.created),
            conflicts=report.conflicts,
            failures=report.failures,
        )
        return report

    # ------------------------------------------------------------------ #
    # Single records
    # ------------------------------------------------------------------ #

    def read_one(self, kind: ResourceKind, record_id: str) -> ReadOneResult:
        """Fetch one record by id.  Never provisions."""
        if not self._probe.is_available():
            logger.info("fallback_served", kind=kind.name, reason="store_unavailable", id=record_id)
            return self._fallback_one(kind, record_id, MSG_UNAVAILABLE)
        try:
            with self._session_factory() as session:
                repo = KindRepository(session, kind)
                row = repo.get(record_id)
                record = repo.to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.warning("store_query_failed", kind=kind.name, id=record_id, error=str(e))
            return self._fallback_one(kind, record_id, MSG_QUERY_FAILED)
        if record is None:
            raise NotFound(f"{kind.label} not found")
        return ReadOneResult(record, Source.DATABASE)

    def _fallback_one(self, kind: ResourceKind, record_id: str, message: str) -> ReadOneResult:
        record = find_fallback(kind, record_id)
        if record is None:
            raise NotFound(f"{kind.label} not found")
        return ReadOneResult(record, Source.FALLBACK, message)

    def read_singleton(self, kind: ResourceKind, key: str | None = None) -> ReadOneResult:
        """Read the canonical document of a singleton kind (or content section).

        A missing document is provisioned from the catalog, like an empty
        kind in :meth:`read_many`.
        """
        default = self._catalog_singleton(kind, key)
        if not self._probe.is_available():
            logger.info("fallback_served", kind=kind.name, reason="store_unavailable", key=key)
            return self._fallback_singleton(kind, default, MSG_UNAVAILABLE)
        try:
            existing = self._query_singleton(kind, key)
            if existing is not None:
                return ReadOneResult(existing, Source.DATABASE)
            if default is None:
                raise NotFound(f"{kind.label} not found")
            result = self._writer.persist_seed(kind, default)
            if result.outcome is SeedOutcome.CREATED and result.record is not None:
                return ReadOneResult(
                    result.record,
                    Source.CREATED,
                    f"Default {kind.label.lower()} created successfully",
                )
            if result.outcome is SeedOutcome.BENIGN_CONFLICT:
                existing = self._query_singleton(kind, key)
                if existing is not None:
                    return ReadOneResult(existing, Source.DATABASE)
        except SQLAlchemyError as e:
            logger.warning("store_query_failed", kind=kind.name, key=key, error=str(e))
            return self._fallback_singleton(kind, default, MSG_QUERY_FAILED)
        return self._fallback_singleton(kind, default, MSG_PROVISION_FAILED)

    def _query_singleton(self, kind: ResourceKind, key: str | None) -> BaseModel | None:
        with self._session_factory() as session:
            repo = KindRepository(session, kind)
            row = repo.first(key)
            return repo.to_record(row) if row is not None else None

    @staticmethod
    def _catalog_singleton(kind: ResourceKind, key: str | None) -> BaseModel | None:
        for record in get_fallback(kind):
            if kind.lookup_field is None or getattr(record, kind.lookup_field) == key:
                return record
        return None

    @staticmethod
    def _fallback_singleton(
        kind: ResourceKind,
        default: BaseModel | None,
        message: str,
    ) -> ReadOneResult:
        if default is None:
            raise NotFound(f"{kind.label} not found and no fallback available")
        return ReadOneResult(default, Source.FALLBACK, message)

    # ------------------------------------------------------------------ #
    # Derived reads
    # ------------------------------------------------------------------ #

    def derive(
        self,
        kind: ResourceKind,
        from_store: Callable[[KindRepository], T],
        from_fallback: Callable[[list[BaseModel]], T],
    ) -> tuple[T, Source]:
        """Compute an aggregate from the store, or from the catalog when it is unusable."""
        if not self._probe.is_available():
            logger.info("fallback_served", kind=kind.name, reason="store_unavailable", derived=True)
            return from_fallback(get_fallback(kind)), Source.FALLBACK
        try:
            with self._session_factory() as session:
                return from_store(KindRepository(session, kind)), Source.DATABASE
        except SQLAlchemyError as e:
            logger.warning("store_query_failed", kind=kind.name, derived=True, error=str(e))
            return from_fallback(get_fallback(kind)), Source.FALLBACK


__all__ = [
    "AvailabilityAwareReader",
    "ProvisionReport",
    "ReadManyResult",
    "ReadOneResult",
    "Source",
]
