"""
Admin routes: site-wide listings, post removal and role management.
All of them require a token carrying the admin role.
"""

from typing import List

from fastapi import APIRouter

from blogapi.api.deps import AdminClaimsDep, ClaimsDep, SessionDep
from blogapi.core.logging import get_logger
from blogapi.core.permissions import Action, authorize
from blogapi.schemas.post import PostResponse, SuccessResponse
from blogapi.schemas.user import RoleUpdate, UserResponse
from blogapi.services.post_service import PostService
from blogapi.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/posts", response_model=List[PostResponse])
def list_all_posts(claims: AdminClaimsDep, session: SessionDep) -> List[PostResponse]:
    """List every post, newest first."""
    return [PostResponse.from_model(p) for p in PostService.list_posts(session)]


@router.delete("/posts/{post_id}", response_model=SuccessResponse)
def delete_any_post(post_id: str, claims: ClaimsDep, session: SessionDep) -> SuccessResponse:
    PostService.get_by_id(session, post_id)
    authorize(claims, Action.ADMIN)
    PostService.delete(session, post_id)
    logger.info(f"Admin {claims.sub} deleted post {post_id}")
    return SuccessResponse()


@router.get("/users", response_model=List[UserResponse])
def list_users(claims: AdminClaimsDep, session: SessionDep) -> List[UserResponse]:
    """
    List all users.

    Returns:
        User projections; password hashes are never included
    """
    return [UserResponse.model_validate(u) for u in UserService.list_users(session)]


@router.put("/users/{user_id}/role", response_model=UserResponse)
def set_user_role(
    user_id: str,
    role_in: RoleUpdate,
    claims: ClaimsDep,
    session: SessionDep,
) -> UserResponse:
    """
    Change a user's role.

    The change applies to tokens issued afterwards; tokens already held by
    the user keep the role they were issued with.

    Raises:
        InvariantViolation: If the promotion would create a second admin
    """
    UserService.get_by_id(session, user_id)
    authorize(claims, Action.ADMIN)
    user = UserService.set_role(session, user_id, role_in.role)
    return UserResponse.model_validate(user)
