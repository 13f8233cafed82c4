"""
Authentication router.

Endpoints:
    POST /auth/login      Exchange credentials for a bearer token
    POST /auth/register   Create an administrator (open until the first exists)
    GET  /auth/me         Profile of the token holder

Tags:
    showcase, api, router, auth

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body

from showcase.api.deps import Access, CurrentAdmin, OptionalClaims
from showcase.core.envelope import success_envelope
from showcase.ops import auth as auth_ops

router = APIRouter(prefix="/auth")

Payload = Annotated[dict[str, Any], Body()]


def _session_body(token: str, admin: auth_ops.AdminRecord) -> dict[str, Any]:
    return {"token": token, "admin": admin.model_dump(by_alias=True, mode="json")}


@router.post("/login")
def login(access: Access, body: Payload):
    token, admin = auth_ops.login(access, body)
    return success_envelope(_session_body(token, admin), message="Login successful")


@router.post("/register", status_code=201)
def register(access: Access, claims: OptionalClaims, body: Payload):
    token, admin = auth_ops.register(access, body, claims)
    return success_envelope(_session_body(token, admin), message="Admin registered successfully")


@router.get("/me")
def me(access: Access, admin: CurrentAdmin):
    return success_envelope({"admin": auth_ops.current_admin(access, admin)})
