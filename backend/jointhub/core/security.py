# jointhub/core/security.py
"""
Security module for authentication.
Handles password hashing and issuing/validating the bearer tokens that carry a
user's identity between requests.
"""
import datetime as dt
import uuid
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

from jointhub.config import settings
from jointhub.core.errors import Forbidden, Unauthenticated

# Password hashing context
# Argon2 is salted per hash and has a fixed work factor
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

# JWT configuration
JWT_SECRET = settings.jwt_secret
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes
JWT_ALG = "HS256"  # HMAC SHA-256


@dataclass(frozen=True)
class Identity:
    """Who a valid token (or a successful login) says the caller is."""
    id: str
    username: str


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, username: str) -> str:
    """
    Create a signed access token for a user.

    Token payload includes:
        - sub: Subject (user ID)
        - username: Login name, so handlers never need a user lookup
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,
        "username": username,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate an access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": ["sub", "exp"]},
    )


def issue_token(identity: Identity) -> str:
    return create_access_token(identity.id, identity.username)


def validate_token(token: str | None) -> Identity:
    """
    Turn a bearer token into the identity it carries.

    Raises:
        Unauthenticated: No token was presented
        Forbidden: The token is malformed, expired, signed with another secret
            or its subject is not a user id
    """
    if not token or not token.strip():
        raise Unauthenticated()
    try:
        payload = decode_access_token(token.strip())
    except jwt.PyJWTError:
        raise Forbidden()
    user_id = payload.get("sub")
    username = payload.get("username")
    if not user_id or not username:
        raise Forbidden()
    try:
        user_id = uuid.UUID(str(user_id))
    except ValueError:
        raise Forbidden()
    return Identity(id=str(user_id), username=str(username))
