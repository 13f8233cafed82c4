"""
Availability-aware writer — validated, store-gated mutations.

Manifesto:
    A write that cannot reach the store is refused immediately with
    :class:`StoreUnavailable`.  Nothing is queued or retried and nothing is
    reported as success.  Validation runs first, so a malformed payload
    gets field-level errors whether or not the store is up.

Architecture:
    ::

        create / update / upsert_singleton
            1. validate payload against the kind's pydantic model  → ValidationFailed
            2. probe.is_available()                                → StoreUnavailable
            3. before_write hook → persist → after_write hook → commit
               duplicate key                                       → Conflict

        persist_seed (used by reader auto-provisioning)
            one record, one transaction → CREATED | BENIGN_CONFLICT | FAILED

Tags:
    showcase, writer, persistence, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete as sa_delete
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from showcase.core.catalog import get_fallback
from showcase.core.errors import (
    Conflict,
    InternalError,
    NotFound,
    ShowcaseError,
    StoreUnavailable,
    ValidationFailed,
    field_errors_from_pydantic,
)
from showcase.core.kinds import ResourceKind
from showcase.core.logging import get_logger
from showcase.core.probe import ConnectivityProbe
from showcase.core.repository import KindRepository

logger = get_logger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Database connection unavailable. Please try again later."


class SeedOutcome(str, Enum):
    """Result of persisting one catalog record."""

    CREATED = "created"
    BENIGN_CONFLICT = "benign_conflict"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SeedResult:
    outcome: SeedOutcome
    seed_key: str
    record: BaseModel | None = None
    error: str | None = None


@dataclass
class BulkResult:
    """Outcome of N independent single-record updates."""

    updated: list[BaseModel] = field(default_factory=list)
    failed: list[dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def validate_payload(model: type[BaseModel], payload: Any) -> BaseModel:
    """Validate *payload* against *model*, raising :class:`ValidationFailed`."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailed(
            "Validation failed",
            errors=field_errors_from_pydantic(e),
            cause=e,
        ) from e


class AvailabilityAwareWriter:
    """Create / update / delete gated by the connectivity probe."""

    def __init__(
        self,
        probe: ConnectivityProbe,
        session_factory: Callable[[], Session],
    ) -> None:
        self._probe = probe
        self._session_factory = session_factory

    # ------------------------------------------------------------------ #
    # Gating
    # ------------------------------------------------------------------ #

    def require_store(self) -> None:
        if not self._probe.is_available():
            logger.warning("write_refused", reason="store_unavailable")
            raise StoreUnavailable(STORE_UNAVAILABLE_MESSAGE)

    @contextmanager
    def transaction(self, kind: ResourceKind) -> Iterator[KindRepository]:
        """Session + repository; commits on exit, maps store errors."""
        with self._session_factory() as session:
            repo = KindRepository(session, kind)
            try:
                yield repo
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.info("write_conflict", kind=kind.name, error=str(e.orig))
                raise Conflict(f"{kind.label} already exists", cause=e) from e
            except OperationalError as e:
                session.rollback()
                logger.error("store_write_failed", kind=kind.name, error=str(e))
                raise StoreUnavailable(STORE_UNAVAILABLE_MESSAGE, cause=e) from e
            except ShowcaseError:
                session.rollback()
                raise

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def create(self, kind: ResourceKind, payload: Any) -> BaseModel:
        model = validate_payload(kind.create_model, payload)
        self.require_store()
        data = model.model_dump()
        if kind.before_write is not None:
            data = kind.before_write(data, None)
        with self.transaction(kind) as repo:
            row = repo.add(data)
            repo.session.flush()
            if kind.after_write is not None:
                kind.after_write(repo.session, row, data)
        logger.info("record_created", kind=kind.name, id=row.id)
        return repo.to_record(row)

    def update(self, kind: ResourceKind, record_id: str, payload: Any) -> BaseModel:
        model = validate_payload(kind.update_model, payload)
        self.require_store()
        data = model.model_dump(exclude_unset=True)
        with self.transaction(kind) as repo:
            row = repo.get(record_id)
            if row is None:
                raise NotFound(f"{kind.label} not found")
            row = self._patch(kind, repo, row, data)
        logger.info("record_updated", kind=kind.name, id=record_id, fields=sorted(data))
        return repo.to_record(row)

    def delete(self, kind: ResourceKind, record_id: str) -> None:
        self.require_store()
        with self.transaction(kind) as repo:
            row = repo.get(record_id)
            if row is None:
                raise NotFound(f"{kind.label} not found")
            repo.session.delete(row)
        logger.info("record_deleted", kind=kind.name, id=record_id)

    def update_many(
        self,
        kind: ResourceKind,
        items: list[tuple[str, dict[str, Any]]],
    ) -> BulkResult:
        """Apply each ``(id, patch)`` as its own update; failures don't stop the rest."""
        self.require_store()
        result = BulkResult()
        for record_id, patch in items:
            try:
                result.updated.append(self.update(kind, record_id, patch))
            except ShowcaseError as e:
                logger.warning("bulk_item_failed", kind=kind.name, id=record_id, error=e.message)
                result.failed.append({"id": record_id, "message": e.message})
        return result

    def upsert_singleton(
        self,
        kind: ResourceKind,
        key: str | None,
        payload: Any,
    ) -> BaseModel:
        """Update the canonical document for *key*, creating it from the catalog first if missing."""
        model = validate_payload(kind.update_model, payload)
        self.require_store()
        data = model.model_dump(exclude_unset=True)
        with self.transaction(kind) as repo:
            row = repo.first(key)
            if row is None:
                row = repo.add(self._singleton_base(kind, key))
                repo.session.flush()
            row = self._patch(kind, repo, row, data)
        logger.info("singleton_upserted", kind=kind.name, key=key)
        return repo.to_record(row)

    def reset_singleton(self, kind: ResourceKind) -> BaseModel:
        """Drop the stored document(s) and persist the catalog default again."""
        self.require_store()
        with self.transaction(kind) as repo:
            repo.session.execute(sa_delete(kind.table))
        catalog = get_fallback(kind)
        if not catalog:
            raise NotFound(f"{kind.label} has no default")
        result = self.persist_seed(kind, catalog[0])
        if result.record is None:
            raise InternalError(f"Could not restore default {kind.label.lower()}")
        logger.info("singleton_reset", kind=kind.name)
        return result.record

    # ------------------------------------------------------------------ #
    # Provisioning
    # ------------------------------------------------------------------ #

    def persist_seed(self, kind: ResourceKind, record: BaseModel) -> SeedResult:
        """Persist one catalog record in its own transaction.

        A duplicate seed key means another request already provisioned this
        record; that is reported as ``BENIGN_CONFLICT``, never raised.
        """
        seed_key = kind.seed_key(record)
        data = record.model_dump(exclude={"created_at", "updated_at"})
        data["seed_key"] = seed_key
        with self._session_factory() as session:
            repo = KindRepository(session, kind)
            try:
                row = repo.add(data)
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.info("provision_item_conflict", kind=kind.name, seed_key=seed_key)
                return SeedResult(SeedOutcome.BENIGN_CONFLICT, seed_key, error=str(e.orig))
            except SQLAlchemyError as e:
                session.rollback()
                logger.warning(
                    "provision_item_failed", kind=kind.name, seed_key=seed_key, error=str(e)
                )
                return SeedResult(SeedOutcome.FAILED, seed_key, error=str(e))
            return SeedResult(SeedOutcome.CREATED, seed_key, record=repo.to_record(row))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _patch(
        kind: ResourceKind,
        repo: KindRepository,
        row: Any,
        data: dict[str, Any],
    ) -> Any:
        if kind.before_write is not None:
            data = kind.before_write(data, row)
        repo.apply(row, data)
        repo.session.flush()
        if kind.after_write is not None:
            kind.after_write(repo.session, row, data)
        return row

    @staticmethod
    def _singleton_base(kind: ResourceKind, key: str | None) -> dict[str, Any]:
        for record in get_fallback(kind):
            if kind.lookup_field is None or getattr(record, kind.lookup_field) == key:
                base = record.model_dump(exclude={"id", "created_at", "updated_at"})
                base["seed_key"] = kind.seed_key(record)
                return base
        base = {"seed_key": key}
        if kind.lookup_field is not None:
            base[kind.lookup_field] = key
        return base


__all__ = [
    "AvailabilityAwareWriter",
    "BulkResult",
    "STORE_UNAVAILABLE_MESSAGE",
    "SeedOutcome",
    "SeedResult",
    "validate_payload",
]
