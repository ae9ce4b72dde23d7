"""
Security utilities for referrer accounts.

Password hashing (bcrypt via passlib) and the JWT bearer tokens handed to
the client at login/signup.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from referhub.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a submitted password against the stored bcrypt hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password before it is stored on the User row."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed bearer token.

    Args:
        data: Claims to encode, at least {"sub": <user email>}
        expires_delta: Lifetime override; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        The encoded JWT string sent back as ``access_token``
    """
    to_encode = data.copy()
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + lifetime

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode a bearer token, returning None when it is invalid or expired."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except InvalidTokenError:
        return None


def get_token_subject(token: str) -> Optional[str]:
    """Return the ``sub`` claim (the referrer's email) of a valid token."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    return payload.get("sub")
