"""
Authentication routes for user registration and login.
Provides JWT token-based authentication.
"""

from fastapi import APIRouter, status

from blogapi.api.deps import SessionDep
from blogapi.core.exceptions import Unauthenticated
from blogapi.core.logging import get_logger
from blogapi.core.security import issue_token
from blogapi.schemas.token import AuthResponse
from blogapi.schemas.user import UserCreate, UserLogin, UserResponse
from blogapi.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, session: SessionDep) -> AuthResponse:
    """
    Register a new user and log them in.

    Args:
        user_in: User registration data
        session: Database session

    Returns:
        Access token and the created user

    Raises:
        ConflictError: If email already registered
    """
    user = UserService.register(session, user_create=user_in)
    return AuthResponse(token=issue_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, session: SessionDep) -> AuthResponse:
    """
    Exchange email and password for an access token.

    Raises:
        Unauthenticated: If credentials are invalid
    """
    try:
        user = UserService.authenticate(session, email=credentials.email, password=credentials.password)
    except Unauthenticated:
        logger.warning(f"Failed login attempt for email: {credentials.email}")
        raise

    logger.info(f"User logged in: {user.email} (ID: {user.id})")
    return AuthResponse(token=issue_token(user), user=UserResponse.model_validate(user))
