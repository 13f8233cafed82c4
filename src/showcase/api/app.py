"""
FastAPI application factory.

``create_app()`` wires the access layer, middleware, routers, error
handlers, and lifespan events into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root.  The engine and the
    probe may be injected (tests pass an in-memory engine and a
    ``StaticProbe``); otherwise they are built from settings.

Tags:
    showcase, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from showcase.api.deps import get_settings
from showcase.api.middleware import (
    RequestIDMiddleware,
    StoreStatusMiddleware,
    TimingMiddleware,
    register_error_handlers,
)
from showcase.api.settings import ShowcaseAPISettings
from showcase.core.access import ContentAccess, build_access
from showcase.core.logging import configure_logging, get_logger
from showcase.core.probe import ConnectivityProbe, ManagedProbe

log = get_logger("showcase.api")


async def _heartbeat(access: ContentAccess, probe: ManagedProbe, interval: float) -> None:
    """Re-ping the store forever; create the schema once it first comes up."""
    while True:
        await asyncio.sleep(interval)
        if await asyncio.to_thread(probe.refresh):
            await asyncio.to_thread(access.ensure_schema)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: connect, create tables, heartbeat, dispose."""
    settings: ShowcaseAPISettings = app.state.settings
    access: ContentAccess = app.state.access

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )
    log.info("showcase API starting", version=app.version)

    probe = access.probe
    managed = isinstance(probe, ManagedProbe)
    if managed:
        await asyncio.to_thread(probe.connect)
    if not await asyncio.to_thread(access.ensure_schema):
        log.warning("store_unreachable_at_startup", state=probe.state.value)

    heartbeat: asyncio.Task[None] | None = None
    if managed and settings.heartbeat_seconds > 0:
        heartbeat = asyncio.create_task(_heartbeat(access, probe, settings.heartbeat_seconds))

    yield

    if heartbeat is not None:
        heartbeat.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await heartbeat
    if managed:
        probe.close()
    else:
        access.engine.dispose()
    log.info("showcase API shutting down")


def create_app(
    settings: ShowcaseAPISettings | None = None,
    *,
    engine: Engine | None = None,
    probe: ConnectivityProbe | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : ShowcaseAPISettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    engine : Engine | None
        Pre-built engine; built from ``settings.database_url`` when omitted.
    probe : ConnectivityProbe | None
        Availability probe; an ``EngineProbe`` on *engine* when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.access = build_access(settings, engine=engine, probe=probe)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(StoreStatusMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[] if settings.cors_allow_all else settings.cors_origins,
        allow_origin_regex=".*" if settings.cors_allow_all else None,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
        expose_headers=["X-DB-Status", "X-Request-ID", "X-Process-Time-Ms"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    register_error_handlers(app)

    # ── Routers ──────────────────────────────────────────────────────
    from showcase.api.routers import (
        achievements,
        auth,
        contacts,
        content,
        customization,
        projects,
        services,
        team,
    )
    from showcase.api.routers.health import create_health_router

    prefix = settings.api_prefix

    app.include_router(
        create_health_router("showcase-api", version=settings.api_version),
        prefix=prefix,
    )
    app.include_router(auth.router, prefix=prefix, tags=["auth"])
    app.include_router(achievements.router, prefix=prefix, tags=["achievements"])
    app.include_router(content.router, prefix=prefix, tags=["content"])
    app.include_router(team.router, prefix=prefix, tags=["team"])
    app.include_router(projects.router, prefix=prefix, tags=["projects"])
    app.include_router(services.router, prefix=prefix, tags=["services"])
    app.include_router(contacts.router, prefix=prefix, tags=["contacts"])
    app.include_router(customization.router, prefix=prefix, tags=["customization"])

    return app
