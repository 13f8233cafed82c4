"""SQLAlchemy 2.0 ORM layer for the showcase store.

Modules
-------
base        ShowcaseBase (declarative base) + RecordMixin + TimestampMixin
session     Engine factory, ShowcaseSession, row_to_dict
tables      One mapped class per resource kind, plus AdminTable

Tags:
    showcase, orm, sqlalchemy, declarative

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from showcase.core.orm.base import RecordMixin, ShowcaseBase, TimestampMixin, new_id, utcnow
from showcase.core.orm.session import (
    ShowcaseSession,
    create_showcase_engine,
    row_to_dict,
    showcase_session_factory,
)
from showcase.core.orm.tables import *  # noqa: F401,F403

__all__ = [
    "RecordMixin",
    "ShowcaseBase",
    "ShowcaseSession",
    "TimestampMixin",
    "create_showcase_engine",
    "new_id",
    "row_to_dict",
    "showcase_session_factory",
    "utcnow",
]
