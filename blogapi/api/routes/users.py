"""
User routes for the current user's profile.
"""

from fastapi import APIRouter

from blogapi.api.deps import CurrentUserDep, SessionDep
from blogapi.schemas.user import UserResponse, UserUpdate
from blogapi.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: CurrentUserDep) -> UserResponse:
    """
    Get current user's profile.
    This is a protected route that requires authentication.

    Args:
        current_user: Current authenticated user

    Returns:
        User profile data
    """
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse)
def update_current_user_profile(
    user_in: UserUpdate,
    current_user: CurrentUserDep,
    session: SessionDep,
) -> UserResponse:
    """
    Update the current user's name, bio or profile picture.
    Posts and comments keep the author name they were created with.
    """
    user = UserService.update_profile(session, current_user.id, user_in)
    return UserResponse.model_validate(user)
