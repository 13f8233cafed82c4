"""SQLAlchemy engine factory and session helpers.

Manifesto:
    The engine (and its pool) is process-wide shared state: built once at
    startup with its connection timeouts, then read by the connectivity
    probe and used by every request.  Nothing here adds request-level
    locking or transactional wrapping beyond single-row commits.

This module provides:

* ``create_showcase_engine``   -- Engine from a URL with timeout settings.
* ``ShowcaseSession``          -- ``Session`` with ``expire_on_commit=False``.
* ``showcase_session_factory`` -- ``sessionmaker`` producing ``ShowcaseSession``.
* ``row_to_dict``              -- Column attributes of a mapped row as a dict.

Tags:
    showcase, orm, sqlalchemy, session, engine

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite:/"))


def create_showcase_engine(
    url: str = "sqlite:///showcase.db",
    *,
    echo: bool = False,
    connect_timeout_s: int | None = None,
    pool_size: int | None = None,
    pool_timeout_s: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with the process-wide timeout settings.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql+psycopg://…``, etc.)
    echo:
        If ``True``, log all SQL.
    connect_timeout_s:
        Driver connect timeout (SQLite: busy timeout).
    pool_size, pool_timeout_s:
        Connection pool parameters (ignored for SQLite).
    """

    if url.startswith("sqlite"):
        connect_args: dict[str, Any] = {"check_same_thread": False}
        if connect_timeout_s is not None:
            connect_args["timeout"] = connect_timeout_s
        kwargs.setdefault("connect_args", connect_args)
        if _is_memory_sqlite(url):
            # one shared connection, otherwise every session sees an empty db
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            if not _is_memory_sqlite(url):
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if pool_timeout_s is not None:
        pool_kwargs["pool_timeout"] = pool_timeout_s
    if connect_timeout_s is not None:
        kwargs.setdefault("connect_args", {"connect_timeout": connect_timeout_s})

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class ShowcaseSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Rows stay readable after commit, which the reader relies on when it
    serialises freshly provisioned records.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def showcase_session_factory(engine: Engine) -> sessionmaker[ShowcaseSession]:
    """Return a ``sessionmaker`` bound to *engine*."""
    return sessionmaker(bind=engine, class_=ShowcaseSession, expire_on_commit=False)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Column attributes of a mapped instance, keyed by attribute name."""
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
