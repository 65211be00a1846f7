"""Password hashing and JWT helpers."""
from datetime import timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from mern_buddy.config import settings
from mern_buddy.utils.time_utils import utcnow


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        >>> hash_password("mypassword123").startswith("$2b$")
        True
    """
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def create_access_token(
    user_id: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token identifying a user.

    Args:
        user_id: User ID stored in the ``sub`` claim
        expires_delta: Optional custom lifetime, defaults to the configured one

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_expiration_minutes)
    claims = {
        "sub": user_id,
        "exp": utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> str:
    """
    Decode a JWT access token and return the caller's user ID.

    Raises:
        JWTError: If the token is invalid, expired or has no subject
    """
    payload = jwt.decode(
        token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
    )
    user_id = payload.get("sub")
    if not user_id:
        raise JWTError("Token payload missing 'sub' claim")
    return user_id
