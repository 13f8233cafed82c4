"""Password hashing and bearer tokens for administrators.

Passwords are hashed with bcrypt; tokens are HS256 JWTs carrying the admin
id (``sub``) and role.  Tokens are verified by signature and expiry only, so
authorisation never needs a store round trip.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

import bcrypt
import jwt

from showcase.core.errors import Unauthorized

_BCRYPT_ROUNDS = 12
# bcrypt ignores everything after 72 bytes and newer releases reject it
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, password_hash.encode("ascii"))
    except ValueError:
        return False


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject: str
    role: str
    expires_at: datetime.datetime


def create_access_token(
    subject: str,
    *,
    secret: str,
    role: str = "admin",
    algorithm: str = "HS256",
    expire_minutes: int = 60,
    now: datetime.datetime | None = None,
) -> str:
    issued = now or datetime.datetime.now(datetime.UTC)
    payload: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "iat": issued,
        "exp": issued + datetime.timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Verify *token* and return its claims, raising :class:`Unauthorized`."""
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise Unauthorized("Token expired", cause=e) from e
    except jwt.InvalidTokenError as e:
        raise Unauthorized("Invalid token", cause=e) from e
    return TokenClaims(
        subject=str(payload["sub"]),
        role=str(payload.get("role", "admin")),
        expires_at=datetime.datetime.fromtimestamp(payload["exp"], datetime.UTC),
    )


__all__ = [
    "TokenClaims",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
