"""Signed session tokens.

A token is an HS256 JWT carrying the user id (``sub``), role, email, name
and expiry. Verification needs nothing but the secret, so the Ordering
context can resolve a principal without touching the identity store.
"""

import os
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from shared.errors import Unauthenticated
from shared.principal import Principal, Role

from identity.domain import identity

DEFAULT_TTL_MINUTES = 60 * 24


def _settings():
    custom = identity.config.get("custom") or {}
    secret = os.getenv("JWT_SECRET") or custom.get("JWT_SECRET")
    algorithm = custom.get("JWT_ALGORITHM", "HS256")
    ttl = int(os.getenv("TOKEN_TTL_MINUTES") or custom.get("TOKEN_TTL_MINUTES", DEFAULT_TTL_MINUTES))
    return secret, algorithm, ttl


def issue_token(user, expires_minutes: int | None = None) -> str:
    secret, algorithm, ttl = _settings()
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes if expires_minutes is not None else ttl)
    claims = {
        "sub": str(user.id),
        "role": user.role,
        "email": user.email,
        "name": user.full_name,
        "exp": expire,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def resolve_principal(token: str | None) -> Principal:
    """Verify ``token`` and turn its claims into a Principal.

    Raises:
        Unauthenticated: the token is missing, malformed, tampered with or expired.
    """
    if not token:
        raise Unauthenticated("Access token required")

    secret, algorithm, _ = _settings()
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise Unauthenticated("Token has expired")
    except JWTError:
        raise Unauthenticated("Invalid token")

    try:
        role = Role(claims.get("role"))
    except ValueError:
        raise Unauthenticated("Invalid token")
    if not claims.get("sub"):
        raise Unauthenticated("Invalid token")

    return Principal(
        user_id=claims["sub"],
        role=role,
        email=claims.get("email"),
        full_name=claims.get("name"),
    )
