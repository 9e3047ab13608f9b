# jointhub/api/deps.py
from fastapi import Depends, Header

from jointhub.config import settings
from jointhub.core import db
from jointhub.core.errors import Unavailable
from jointhub.core.security import Identity, validate_token


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


async def get_current_identity(
    authorization: str | None = Header(default=None),
) -> Identity:
    """
    FastAPI dependency resolving the caller from ``Authorization: Bearer <token>``.

    The token is self-contained, so no database lookup happens here and a
    rejected request never reaches a store.

    Raises:
        Unauthenticated (401): No bearer token was sent
        Forbidden (403): The token is malformed, expired or signed with another secret
    """
    return validate_token(_bearer_token(authorization))


async def require_db() -> None:
    """
    FastAPI dependency failing fast with 503 while the datastore is unreachable.
    """
    if not db.is_db_available():
        raise Unavailable()


async def get_chat_identity(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Authentication first, then the datastore check."""
    await require_db()
    return identity


async def generation_access(
    authorization: str | None = Header(default=None),
) -> Identity | None:
    """
    Authentication for the generation proxy, applied only when
    REQUIRE_AUTH_FOR_GENERATION is enabled.
    """
    if not settings.require_auth_for_generation:
        return None
    return validate_token(_bearer_token(authorization))
