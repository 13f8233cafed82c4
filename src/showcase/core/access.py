"""Composition of the access layer: engine, probe, reader, writer, registry.

``ContentAccess`` is the one object the API and the CLI hold.  It is built
once per process; everything in it is shared by all requests.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from showcase.core.kinds import KindRegistry
from showcase.core.logging import get_logger
from showcase.core.orm import ShowcaseBase, create_showcase_engine, showcase_session_factory
from showcase.core.probe import ConnectivityProbe, EngineProbe
from showcase.core.reader import AvailabilityAwareReader
from showcase.core.settings import ShowcaseSettings
from showcase.core.writer import AvailabilityAwareWriter

logger = get_logger(__name__)


@dataclass
class ContentAccess:
    settings: ShowcaseSettings
    engine: Engine
    probe: ConnectivityProbe
    session_factory: sessionmaker
    reader: AvailabilityAwareReader
    writer: AvailabilityAwareWriter
    registry: KindRegistry
    schema_ready: bool = False
    _schema_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def create_tables(self) -> None:
        ShowcaseBase.metadata.create_all(self.engine)
        self.schema_ready = True

    def ensure_schema(self) -> bool:
        """Create missing tables the first time the store is reachable.

        Safe to call on every request: once the schema exists, or while the
        store is down, it returns without touching the engine.
        """
        if self.schema_ready or not self.probe.is_available():
            return self.schema_ready
        with self._schema_lock:
            if not self.schema_ready:
                try:
                    self.create_tables()
                except SQLAlchemyError as e:
                    logger.warning("schema_init_failed", error=str(e))
                    return False
                logger.info("schema_ready")
        return True


def build_access(
    settings: ShowcaseSettings | None = None,
    *,
    engine: Engine | None = None,
    probe: ConnectivityProbe | None = None,
    registry: KindRegistry | None = None,
) -> ContentAccess:
    """Wire the access layer from *settings*; any piece may be injected."""
    from showcase.kinds import default_registry

    settings = settings or ShowcaseSettings()
    if engine is None:
        engine = create_showcase_engine(
            settings.database_url,
            connect_timeout_s=settings.connect_timeout_s,
            pool_size=settings.pool_size,
            pool_timeout_s=settings.pool_timeout_s,
        )
    probe = probe or EngineProbe(engine)
    factory = showcase_session_factory(engine)
    writer = AvailabilityAwareWriter(probe, factory)
    reader = AvailabilityAwareReader(probe, factory, writer)
    return ContentAccess(
        settings=settings,
        engine=engine,
        probe=probe,
        session_factory=factory,
        reader=reader,
        writer=writer,
        registry=registry or default_registry(),
    )


__all__ = ["ContentAccess", "build_access"]
