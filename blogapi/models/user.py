"""
User model with role-based access control.
Implements a simple admin/user role system with at most one admin.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel

# Value stored in ``User.admin_slot`` for the admin row. Every other row holds
# NULL, so the unique constraint admits exactly one admin.
ADMIN_SLOT = 1


class UserRole(str, Enum):
    """User role enumeration for RBAC."""

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """
    User model with authentication and role support.

    Attributes:
        id: Opaque string primary key
        name: Display name, copied into post/comment author snapshots
        email: Unique, lower-cased email address (used for login)
        hashed_password: Passlib hash of the password
        role: User role (admin or user)
        admin_slot: ADMIN_SLOT for the admin, NULL otherwise (unique)
        bio: Free-text profile bio
        profile_picture: Optional picture URL
        created_at: Timestamp of account creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "users"  # type: ignore

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    role: UserRole = Field(default=UserRole.USER)
    admin_slot: Optional[int] = Field(default=None, unique=True)
    bio: str = Field(default="")
    profile_picture: Optional[str] = Field(default=None, max_length=2048)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
