"""Shared base settings for the showcase service.

``ShowcaseSettings`` holds everything the access layer itself needs
(store connection, token signing, logging).  The REST transport extends it
in :mod:`showcase.api.settings`; the CLI uses it directly.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    Connection timeouts are decided once, here, when the engine is built,
    never per request.

Examples:
    >>> import os
    >>> os.environ["SHOWCASE_DATABASE_URL"] = "sqlite:///:memory:"
    >>> ShowcaseSettings().database_url
    'sqlite:///:memory:'

Tags:
    settings, configuration, pydantic, environment

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShowcaseSettings(BaseSettings):
    """Settings shared by the API and the CLI.

    Order of precedence (highest → lowest):
        1. Environment variables (``SHOWCASE_DATABASE_URL``, ...)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="SHOWCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///showcase.db",
        description="SQLAlchemy connection URL",
    )
    connect_timeout_s: int = Field(default=10, description="Driver connect timeout")
    pool_timeout_s: int = Field(default=30, description="Wait for a pooled connection")
    pool_size: int | None = Field(default=10, description="Pool size (ignored for SQLite)")
    heartbeat_seconds: float = Field(
        default=10.0,
        description="Interval between connectivity refreshes; 0 disables the heartbeat",
    )

    # ── Auth ─────────────────────────────────────────────────────
    jwt_secret: str = Field(default="change-me-in-production", description="Token signing secret")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=7 * 24 * 60, description="Token lifetime")

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool | None = Field(default=None, description="None = auto-detect from tty")
    log_file: str | None = Field(default=None, description="Optional log file path")
