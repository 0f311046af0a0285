"""
API dependencies for FastAPI dependency injection.
Provides reusable dependencies for authentication and authorization.

Authentication trusts the verified token claims as-is; the user record is
only loaded where a route needs live profile data.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from blogapi.core.exceptions import Unauthenticated
from blogapi.core.permissions import Action, authorize
from blogapi.core.security import verify_token
from blogapi.db.session import get_session
from blogapi.models.user import User
from blogapi.schemas.token import TokenClaims
from blogapi.services.user_service import UserService

# Bearer token scheme; missing credentials are reported by get_current_claims
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_session)]


def get_current_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> TokenClaims:
    """
    Dependency to get the verified claims from the bearer token.

    Args:
        credentials: Parsed ``Authorization: Bearer`` header, if any

    Returns:
        Token claims (user id, email, role at issue time)

    Raises:
        Unauthenticated: If the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")
    return verify_token(credentials.credentials)


ClaimsDep = Annotated[TokenClaims, Depends(get_current_claims)]


def get_current_user(session: SessionDep, claims: ClaimsDep) -> User:
    """
    Dependency to load the live user record behind the token.

    Raises:
        NotFound: If the user has been removed since the token was issued
    """
    return UserService.get_by_id(session, claims.sub)


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_admin(claims: ClaimsDep) -> TokenClaims:
    """
    Dependency to ensure the token carries the admin role.

    Raises:
        Forbidden: If the requester is not an admin
    """
    authorize(claims, Action.ADMIN)
    return claims


AdminClaimsDep = Annotated[TokenClaims, Depends(get_current_admin)]
