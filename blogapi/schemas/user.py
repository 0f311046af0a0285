"""
User schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import EmailStr, Field, StringConstraints, field_validator

from blogapi.models.user import UserRole
from blogapi.schemas.base import APIModel

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


def clean_email(value: Any) -> Any:
    """Emails are compared trimmed and case-insensitively."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


class UserCreate(APIModel):
    """Schema for user registration."""

    name: Name
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return clean_email(v)


class UserLogin(APIModel):
    """Schema for user login."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return clean_email(v)


class UserUpdate(APIModel):
    """Schema for profile updates. Role and password are not editable here."""

    name: Optional[Name] = None
    bio: Optional[str] = Field(default=None, max_length=5000)
    profile_picture: Optional[str] = Field(default=None, max_length=2048)


class RoleUpdate(APIModel):
    role: UserRole


class UserResponse(APIModel):
    """
    Schema for user data in API responses.
    Excludes sensitive information like hashed_password.
    """

    id: str
    name: str
    email: str
    role: UserRole
    bio: str = ""
    profile_picture: Optional[str] = None
    created_at: datetime
    updated_at: datetime
