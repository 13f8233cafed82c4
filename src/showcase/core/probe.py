"""
Connectivity probe — cached answer to "is the store usable right now?".

Manifesto:
    Every read and write asks the probe first, so ``is_available()`` must
    be cheap and must never raise.  It reads a state value maintained
    elsewhere (startup connect, the heartbeat, engine error events) and
    performs no network round trip of its own.

Architecture:
    ::

        lifespan ── connect() ──► StoreState.CONNECTED / DISCONNECTED
        heartbeat ── refresh() ─► re-ping, update state
        engine "handle_error" (is_disconnect) ─► DISCONNECTED
                         │
        reader / writer ─┴─ is_available()  (state == CONNECTED)

Examples:
    >>> probe = StaticProbe(available=False)
    >>> probe.is_available()
    False
    >>> probe.state
    <StoreState.DISCONNECTED: 'disconnected'>

Tags:
    showcase, probe, availability, health

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from showcase.core.logging import get_logger

logger = get_logger(__name__)


class StoreState(str, Enum):
    """Connection states reported by the driver lifecycle."""

    CONNECTED = "connected"
    CONNECTING = "connecting"
    DISCONNECTED = "disconnected"
    DISCONNECTING = "disconnecting"


@runtime_checkable
class ConnectivityProbe(Protocol):
    """Anything that can answer ``is_available()`` without blocking."""

    @property
    def state(self) -> StoreState: ...

    def is_available(self) -> bool: ...


@runtime_checkable
class ManagedProbe(ConnectivityProbe, Protocol):
    """A probe whose state the application lifecycle drives."""

    def connect(self) -> bool: ...

    def refresh(self) -> bool: ...

    def close(self) -> None: ...


class EngineProbe:
    """Probe backed by a SQLAlchemy engine.

    State starts as ``CONNECTING`` (treated as unavailable) until
    :meth:`connect` pings the store.  A disconnect error raised by any
    statement on the engine flips it to ``DISCONNECTED`` immediately; the
    next successful :meth:`refresh` brings it back.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._state = StoreState.CONNECTING
        self._lock = threading.Lock()
        event.listen(engine, "handle_error", self._on_engine_error)

    @property
    def state(self) -> StoreState:
        return self._state

    def is_available(self) -> bool:
        return self._state is StoreState.CONNECTED

    def _set_state(self, new: StoreState) -> None:
        with self._lock:
            old, self._state = self._state, new
        if old is not new:
            log = logger.info if new is StoreState.CONNECTED else logger.warning
            log("store_state_changed", old=old.value, new=new.value)

    def _ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("store_ping_failed", error=str(e))
            return False

    def connect(self) -> bool:
        """Initial connection attempt at startup."""
        self._set_state(StoreState.CONNECTING)
        ok = self._ping()
        self._set_state(StoreState.CONNECTED if ok else StoreState.DISCONNECTED)
        return ok

    def refresh(self) -> bool:
        """Re-ping the store; called periodically by the heartbeat."""
        if self._state is StoreState.DISCONNECTING:
            return False
        ok = self._ping()
        self._set_state(StoreState.CONNECTED if ok else StoreState.DISCONNECTED)
        return ok

    def mark_disconnected(self) -> None:
        self._set_state(StoreState.DISCONNECTED)

    def close(self) -> None:
        self._set_state(StoreState.DISCONNECTING)
        event.remove(self._engine, "handle_error", self._on_engine_error)
        self._engine.dispose()
        self._set_state(StoreState.DISCONNECTED)

    def _on_engine_error(self, ctx: Any) -> None:
        if ctx.is_disconnect:
            self.mark_disconnected()


class StaticProbe:
    """Probe with a fixed, settable answer.  Used by tests and tooling."""

    def __init__(self, available: bool = True) -> None:
        self.available = available

    @property
    def state(self) -> StoreState:
        return StoreState.CONNECTED if self.available else StoreState.DISCONNECTED

    def is_available(self) -> bool:
        return self.available


__all__ = [
    "ConnectivityProbe",
    "EngineProbe",
    "ManagedProbe",
    "StaticProbe",
    "StoreState",
]
