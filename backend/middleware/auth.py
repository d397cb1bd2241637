"""
Access-token verification for customers and vendors.

Tokens are HS256 JWTs issued by the identity service:
    sub  — principal id (customer id or vendor id, as a string)
    role — "customer" | "vendor"

The principal id resolved here is the only identity the services trust;
ids in request bodies or query strings are never used for scoping.
"""
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional

import jwt
from fastapi import Header

from config import settings
from domain.enums import Role
from domain.errors import PermissionDeniedError, UnauthorizedError

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def decode_access_token(token: str) -> dict:
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting access token")
        raise UnauthorizedError("Server auth misconfigured.")
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Access token expired.")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid access token.")


def issue_access_token(*, principal_id: int, role: Role | str) -> str:
    """Mint a token the way the identity service does (used by tooling and tests)."""
    if not settings.jwt_secret:
        raise UnauthorizedError("Server auth misconfigured.")
    now = _now_utc()
    exp = now.replace(microsecond=0) + timedelta(minutes=settings.jwt_access_ttl_minutes)
    payload = {
        "iss": settings.jwt_issuer,
        "sub": str(principal_id),
        "role": Role(role).value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def authenticate(authorization: Optional[str], role: Role) -> int:
    """Return the principal id for a valid bearer token carrying `role`."""
    token = _parse_bearer_token(authorization)
    if not token:
        raise UnauthorizedError("Authentication required. Provide Authorization: Bearer <token>.")

    payload = decode_access_token(token)
    if payload.get("role") != role.value:
        logger.warning(f"Role mismatch: token role={payload.get('role')!r}, required={role.value!r}")
        raise PermissionDeniedError(f"{role.value.capitalize()} role required for this endpoint.")

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid access token subject.")


async def require_vendor(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> int:
    """Dependency: the calling vendor's id."""
    return authenticate(authorization, Role.VENDOR)


async def require_customer(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> int:
    """Dependency: the calling customer's id."""
    return authenticate(authorization, Role.CUSTOMER)
