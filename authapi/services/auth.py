"""Authentication service for JWT and password handling."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from authapi.config import get_settings
from authapi.errors import InvalidTokenError, TokenExpiredError
from authapi.models.user import User


@lru_cache
def get_pwd_context() -> CryptContext:
    """Password hashing context (bcrypt, fixed work factor)."""
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
    )


def get_password_hash(password: str) -> str:
    """Hash a password. Every call draws a fresh salt."""
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupt hash
        return False


def create_access_token(claims: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token carrying the given identity claims."""
    settings = get_settings()
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expiration_minutes))
    to_encode = {**claims, "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token.

    Raises:
        TokenExpiredError: the signature is valid but ``exp`` has passed.
        InvalidTokenError: bad signature, malformed token, or no ``id`` claim.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    if "id" not in payload:
        raise InvalidTokenError("Token has no id claim")
    return payload


def issue_user_token(user: User) -> str:
    """Create the session token for a user record."""
    return create_access_token({"id": user.id, "name": user.name, "email": user.email})
