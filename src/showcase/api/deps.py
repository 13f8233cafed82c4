"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from showcase.api.deps import Access, CurrentAdmin, Page

    @router.post("/things")
    def create_thing(access: Access, admin: CurrentAdmin, body: dict = Body(...)):
        ...

Manifesto:
    Dependency injection keeps routers thin.  The access layer and the
    settings are created once per app; per-request objects (pagination,
    the caller's token claims) are resolved here.

Tags:
    showcase, api, dependency-injection

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query, Request

from showcase.api.settings import ShowcaseAPISettings
from showcase.core.access import ContentAccess
from showcase.core.errors import Forbidden, Unauthorized
from showcase.core.repository import PageRequest
from showcase.core.security import TokenClaims, decode_access_token

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> ShowcaseAPISettings:
    """Cached settings — loaded once per process."""
    return ShowcaseAPISettings()


# ── Access layer (per app) ───────────────────────────────────────────────


def get_access(request: Request) -> ContentAccess:
    """The app's access layer; creates the schema on the first request after the store comes up."""
    access: ContentAccess = request.app.state.access
    access.ensure_schema()
    return access


# ── Pagination parameters (per-request) ─────────────────────────────────


def get_page(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Items per page (max 100)"),
) -> PageRequest:
    return PageRequest(page=page, limit=limit)


# ── Authentication ──────────────────────────────────────────────────────


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_optional_claims(
    request: Request,
    access: Annotated[ContentAccess, Depends(get_access)],
) -> TokenClaims | None:
    """Claims of a valid bearer token, ``None`` when no token was sent."""
    token = _bearer_token(request)
    if token is None:
        return None
    settings = access.settings
    return decode_access_token(token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_admin(
    claims: Annotated[TokenClaims | None, Depends(get_optional_claims)],
) -> TokenClaims:
    """Require a valid admin bearer token (401 otherwise)."""
    if claims is None:
        raise Unauthorized("No token, authorization denied")
    if claims.role not in ("admin", "super_admin"):
        raise Forbidden("Admin access required")
    return claims


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[ShowcaseAPISettings, Depends(get_settings)]
Access = Annotated[ContentAccess, Depends(get_access)]
Page = Annotated[PageRequest, Depends(get_page)]
OptionalClaims = Annotated[TokenClaims | None, Depends(get_optional_claims)]
CurrentAdmin = Annotated[TokenClaims, Depends(get_current_admin)]
