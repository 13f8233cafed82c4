"""Resource kinds served by the API.

Each module defines the pydantic schemas, the fallback catalog and any
write hooks for one kind, and exports a :class:`ResourceKind` constant.
"""

from __future__ import annotations

from functools import lru_cache

from showcase.core.kinds import KindRegistry
from showcase.kinds.achievements import ACHIEVEMENTS
from showcase.kinds.contacts import CONTACTS
from showcase.kinds.content import CONTENT
from showcase.kinds.customization import CUSTOMIZATION
from showcase.kinds.projects import PROJECTS
from showcase.kinds.services import SERVICES
from showcase.kinds.team import TEAM

ALL_KINDS = (ACHIEVEMENTS, CONTENT, TEAM, PROJECTS, SERVICES, CONTACTS, CUSTOMIZATION)


@lru_cache(maxsize=1)
def default_registry() -> KindRegistry:
    registry = KindRegistry()
    for kind in ALL_KINDS:
        registry.register(kind)
    return registry


__all__ = [
    "ACHIEVEMENTS",
    "ALL_KINDS",
    "CONTACTS",
    "CONTENT",
    "CUSTOMIZATION",
    "PROJECTS",
    "SERVICES",
    "TEAM",
    "default_registry",
]
