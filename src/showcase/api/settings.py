"""
Settings for the HTTP transport.

Adds bind address, URL prefix and CORS policy on top of
:class:`~showcase.core.settings.ShowcaseSettings`.  The website frontend
calls the API from a different origin with credentials, so CORS is either a
fixed allow-list or, with ``SHOWCASE_CORS_ALLOW_ALL=true``, reflects any
origin.
"""

from __future__ import annotations

from pydantic import Field

from showcase.core.settings import ShowcaseSettings

LOCAL_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]


class ShowcaseAPISettings(ShowcaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=5000, description="Bind port")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api", description="URL prefix for all endpoints")
    api_title: str = Field(default="showcase API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default_factory=lambda: list(LOCAL_ORIGINS),
        description="Allowed CORS origins (frontend URLs)",
    )
    cors_allow_all: bool = Field(
        default=False,
        description="Reflect any request origin instead of using cors_origins",
    )
