"""Bearer token issuance and validation for the catalog endpoints."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from movies.core.config import get_settings

logger = logging.getLogger(__name__)

API_USER = "api-user"
ALGORITHM = "HS256"
MISSING_SECRET = "JWT secret is missing in configuration."

security = HTTPBearer(auto_error=False)


def _signing_secret() -> str:
    secret = get_settings().jwt_secret
    if not secret:
        logger.error("JWT_SECRET not configured.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MISSING_SECRET,
        )
    return secret


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def issue_token(*, now: datetime | None = None) -> str:
    """Sign a token for the shared API user, valid for ``jwt_expires_hours``."""

    settings = get_settings()
    secret = _signing_secret()
    issued_at = now or datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "sub": API_USER,
        "role": API_USER,
        "jti": str(uuid.uuid4()),
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.jwt_expires_hours),
    }
    if settings.jwt_issuer:
        claims["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_token(token: str) -> Mapping[str, Any]:
    settings = get_settings()
    secret = _signing_secret()
    return jwt.decode(
        token,
        secret,
        algorithms=[ALGORITHM],
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        options={
            "require": ["exp", "sub"],
            "verify_aud": bool(settings.jwt_audience),
        },
    )


def require_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Mapping[str, Any]:
    """Verify the bearer token and return its payload."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    try:
        return decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError as exc:
        logger.warning("JWT validation failed: Token expired. Detail: %s", exc)
        raise _unauthorized("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.warning("JWT validation failed: Invalid token. Reason: %s", exc)
        raise _unauthorized("Invalid authentication credentials") from exc
