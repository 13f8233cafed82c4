"""
Administrator login, registration and identity.

Registration is open only until the first administrator exists; after that
a valid admin token is required.  Login and registration need the store and
are refused with ``StoreUnavailable`` when it is down.
"""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import Field, model_validator
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from showcase.core.access import ContentAccess
from showcase.core.errors import Conflict, Unauthorized
from showcase.core.logging import get_logger
from showcase.core.orm.tables import AdminTable
from showcase.core.security import (
    TokenClaims,
    create_access_token,
    hash_password,
    verify_password,
)
from showcase.core.writer import validate_payload
from showcase.kinds._common import Email, UtcDatetime, WireModel

logger = get_logger(__name__)


class LoginRequest(WireModel):
    email: str | None = None
    username: str | None = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def _has_identifier(self) -> LoginRequest:
        if not (self.email or self.username):
            raise ValueError("Email or username is required")
        return self


class RegisterRequest(WireModel):
    username: str = Field(min_length=3, max_length=50)
    email: Email
    password: str = Field(min_length=6, max_length=128)


class AdminRecord(WireModel):
    id: str
    username: str
    email: str
    role: str = "admin"
    is_active: bool = True
    created_at: UtcDatetime | None = None


def _admin_record(row: AdminTable) -> AdminRecord:
    return AdminRecord(
        id=row.id,
        username=row.username,
        email=row.email,
        role=row.role,
        is_active=row.is_active,
        created_at=row.created_at,
    )


def _issue_token(access: ContentAccess, admin: AdminRecord) -> str:
    settings = access.settings
    return create_access_token(
        admin.id,
        secret=settings.jwt_secret,
        role=admin.role,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )


def create_admin(
    access: ContentAccess,
    *,
    username: str,
    email: str,
    password: str,
    role: str = "admin",
) -> AdminRecord:
    """Insert an administrator; duplicate username/email raises ``Conflict``."""
    access.writer.require_store()
    with access.session_factory() as session:
        row = AdminTable(
            username=username,
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
        )
        session.add(row)
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise Conflict("Admin with this email or username already exists", cause=e) from e
        admin = _admin_record(row)
    logger.info("admin_created", admin_id=admin.id, username=admin.username)
    return admin


def admin_count(access: ContentAccess) -> int:
    with access.session_factory() as session:
        return int(session.execute(select(func.count()).select_from(AdminTable)).scalar_one())


def login(access: ContentAccess, payload: Any) -> tuple[str, AdminRecord]:
    request = validate_payload(LoginRequest, payload)
    access.writer.require_store()
    identifier = (request.email or request.username or "").strip()  # type: ignore[attr-defined]
    with access.session_factory() as session:
        stmt = select(AdminTable).where(
            or_(AdminTable.email == identifier.lower(), AdminTable.username == identifier)
        )
        row = session.execute(stmt).scalars().first()
        if (
            row is None
            or not row.is_active
            or not verify_password(request.password, row.password_hash)  # type: ignore[attr-defined]
        ):
            logger.warning("login_failed", identifier=identifier)
            raise Unauthorized("Invalid credentials")
        admin = _admin_record(row)
    logger.info("login_succeeded", admin_id=admin.id)
    return _issue_token(access, admin), admin


def register(
    access: ContentAccess,
    payload: Any,
    claims: TokenClaims | None,
) -> tuple[str, AdminRecord]:
    request = validate_payload(RegisterRequest, payload)
    access.writer.require_store()
    if claims is None and admin_count(access) > 0:
        raise Unauthorized("Registration requires an administrator token")
    admin = create_admin(
        access,
        username=request.username,  # type: ignore[attr-defined]
        email=request.email,  # type: ignore[attr-defined]
        password=request.password,  # type: ignore[attr-defined]
    )
    return _issue_token(access, admin), admin


def current_admin(access: ContentAccess, claims: TokenClaims) -> dict[str, Any]:
    """Profile of the token holder; from the token alone when the store is down."""
    profile: dict[str, Any] = {
        "id": claims.subject,
        "role": claims.role,
        "tokenExpiresAt": claims.expires_at.astimezone(datetime.UTC).isoformat(),
    }
    if not access.probe.is_available():
        return profile
    try:
        with access.session_factory() as session:
            row = session.get(AdminTable, claims.subject)
            admin = _admin_record(row) if row is not None else None
    except SQLAlchemyError as e:
        logger.warning("store_query_failed", kind="admins", error=str(e))
        return profile
    if admin is None or not admin.is_active:
        raise Unauthorized("Admin account no longer exists")
    return {**profile, **admin.model_dump(by_alias=True, mode="json")}


__all__ = [
    "AdminRecord",
    "LoginRequest",
    "RegisterRequest",
    "admin_count",
    "create_admin",
    "current_admin",
    "login",
    "register",
]
