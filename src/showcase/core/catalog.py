"""
Static fallback catalog lookup.

The catalog is the set of hand-written records each kind serves while the
store is unreachable, and the seed data persisted the first time a kind is
found empty.  Catalog functions are pure: every call builds fresh model
instances with the same frozen timestamps, so callers may mutate what they
get back without affecting the next caller.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel

from showcase.core.kinds import KindRegistry, ResourceKind

# Frozen timestamp stamped on every catalog record.
CATALOG_TIMESTAMP = datetime.datetime(2024, 1, 1, 0, 0, 0)


def get_fallback(
    kind: ResourceKind | str,
    registry: KindRegistry | None = None,
) -> list[BaseModel]:
    """Catalog records for *kind*; empty for unknown kinds."""
    if isinstance(kind, str):
        if registry is None:
            from showcase.kinds import default_registry

            registry = default_registry()
        if kind not in registry:
            return []
        kind = registry.get_kind(kind)
    return list(kind.fallback())


def find_fallback(kind: ResourceKind, record_id: str) -> BaseModel | None:
    """The catalog record with id *record_id*, or ``None``."""
    for record in kind.fallback():
        if str(record.id) == record_id:  # type: ignore[attr-defined]
            return record
    return None


__all__ = ["CATALOG_TIMESTAMP", "find_fallback", "get_fallback"]
