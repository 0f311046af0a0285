"""
Security utilities for password hashing and JWT token management.

Default hashing uses ``pbkdf2_sha256`` for stable cross-platform behavior in
tests and local development. ``bcrypt`` verification is still supported for
hashes created by earlier deployments.

Tokens are stateless: the role is captured in the claims when the token is
issued and is trusted for the lifetime of the token. A role change takes
effect only once the user logs in again.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from blogapi.core.config import settings
from blogapi.core.exceptions import Unauthenticated
from blogapi.core.logging import get_logger
from blogapi.models.user import User
from blogapi.schemas.token import TokenClaims

logger = get_logger(__name__)

# Prefer pbkdf2 for new hashes while still verifying legacy bcrypt hashes.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def issue_token(user: User, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT carrying the user's id, email and role.

    Args:
        user: The user the token is issued for
        expires_delta: Optional custom lifetime; falls back to
            ``ACCESS_TOKEN_EXPIRE_MINUTES`` and omits ``exp`` when neither is set

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "iat": now,
    }

    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> TokenClaims:
    """
    Verify a token's signature (and expiry, when present) and return its claims.

    Raises:
        Unauthenticated: If the token is malformed, tampered with, expired,
            or lacks the expected claims
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise Unauthenticated("Invalid or expired token")

    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError:
        logger.warning("Token payload is missing required claims")
        raise Unauthenticated("Invalid or expired token")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)
