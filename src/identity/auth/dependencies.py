"""FastAPI dependency that turns the Authorization header into a Principal."""

from fastapi import Header
from shared.errors import Unauthenticated
from shared.logging import add_context
from shared.principal import Principal

from identity.auth.tokens import resolve_principal


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid Authorization header")
    return token.strip()


def current_principal(authorization: str | None = Header(None)) -> Principal:
    principal = resolve_principal(bearer_token(authorization))
    add_context(user_id=principal.user_id, role=principal.role.value)
    return principal
