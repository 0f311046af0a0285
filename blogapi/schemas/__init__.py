"""Pydantic schemas for request/response validation."""

from blogapi.schemas.post import (
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    SuccessResponse,
)
from blogapi.schemas.token import AuthResponse, TokenClaims
from blogapi.schemas.user import RoleUpdate, UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    "AuthResponse",
    "CommentCreate",
    "CommentResponse",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "RoleUpdate",
    "SuccessResponse",
    "TokenClaims",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
]
