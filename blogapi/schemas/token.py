"""
Token schemas for JWT authentication.
"""

from typing import Optional

from pydantic import BaseModel

from blogapi.models.user import UserRole
from blogapi.schemas.base import APIModel
from blogapi.schemas.user import UserResponse


class AuthResponse(APIModel):
    """Schema for register/login responses: access token plus the user."""

    token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenClaims(BaseModel):
    """Schema for a decoded, verified JWT payload."""

    sub: str
    email: str
    role: UserRole
    iat: Optional[int] = None
    exp: Optional[int] = None
