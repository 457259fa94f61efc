"""
Security utilities for JWT authentication and password hashing.

Tokens are HS256 JWTs signed with settings.SECRET_KEY and carry the
claims {username, isAdmin, iat}. Passwords are hashed using bcrypt.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional
from jose import jwt
from passlib.context import CryptContext
from jobly.core.config import settings

# Password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


class TokenSigningError(RuntimeError):
    """Raised when a token cannot be signed (e.g. no secret configured)."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def _claim(user: Any, *names: str) -> Any:
    for name in names:
        if isinstance(user, Mapping):
            if name in user:
                return user[name]
        elif hasattr(user, name):
            return getattr(user, name)
    return None


def build_claims(user: Any) -> dict:
    """
    Build the token claims for a user record.

    Accepts a mapping ({"username", "isAdmin"}) or a User model
    (username, is_admin). isAdmin is only True when the record says
    exactly True; a missing or null flag becomes False.
    """
    username = _claim(user, "username")
    if not username:
        raise ValueError("username is required to create a token")

    is_admin = _claim(user, "isAdmin", "is_admin") is True

    return {"username": username, "isAdmin": is_admin}


def create_token(user: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT for a user.

    Args:
        user: Mapping or User model with a username and optional admin flag
        expires_delta: Optional lifetime; falls back to
            ACCESS_TOKEN_EXPIRE_MINUTES, and no `exp` claim when neither is set

    Returns:
        Encoded JWT token as a string

    Raises:
        TokenSigningError: If no SECRET_KEY is configured
    """
    if not settings.SECRET_KEY:
        raise TokenSigningError("SECRET_KEY is not configured")

    issued_at = datetime.now(timezone.utc)
    to_encode = build_claims(user)
    to_encode["iat"] = int(issued_at.timestamp())

    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode["exp"] = int((issued_at + expires_delta).timestamp())

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        Dictionary containing the token payload

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
