"""
Post routes.

Reading is public. Creating, updating and deleting posts requires the admin
role; being the post's author is not enough. For routes that target an
existing post the order is authenticate, load (404), then authorize (403).
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from blogapi.api.deps import ClaimsDep, SessionDep
from blogapi.core.permissions import Action, Ownership, authorize
from blogapi.schemas.post import PostCreate, PostResponse, PostUpdate, SuccessResponse
from blogapi.services.post_service import PostService
from blogapi.services.user_service import UserService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(post_in: PostCreate, claims: ClaimsDep, session: SessionDep) -> PostResponse:
    """
    Create a post authored by the current (admin) user.

    Args:
        post_in: Title and content
        claims: Verified token claims
        session: Database session

    Returns:
        The created post, with an empty comment list
    """
    authorize(claims, Action.CREATE_POST)
    author = UserService.get_by_id(session, claims.sub)
    post = PostService.create(session, author=author, title=post_in.title, content=post_in.content)
    return PostResponse.from_model(post)


@router.get("", response_model=List[PostResponse])
def list_posts(
    session: SessionDep,
    q: Optional[str] = Query(default=None, description="Search title, content and author name"),
) -> List[PostResponse]:
    """List posts, newest first, optionally filtered by ``q``."""
    return [PostResponse.from_model(p) for p in PostService.list_posts(session, query=q)]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, session: SessionDep) -> PostResponse:
    return PostResponse.from_model(PostService.get_by_id(session, post_id))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_in: PostUpdate,
    claims: ClaimsDep,
    session: SessionDep,
) -> PostResponse:
    """Replace a post's title and content (admin only)."""
    post = PostService.get_by_id(session, post_id)
    authorize(claims, Action.UPDATE_POST, Ownership(post_author_id=post.author_id))
    post = PostService.update(session, post_id, title=post_in.title, content=post_in.content)
    return PostResponse.from_model(post)


@router.delete("/{post_id}", response_model=SuccessResponse)
def delete_post(post_id: str, claims: ClaimsDep, session: SessionDep) -> SuccessResponse:
    """Delete a post together with its comments (admin only)."""
    post = PostService.get_by_id(session, post_id)
    authorize(claims, Action.DELETE_POST, Ownership(post_author_id=post.author_id))
    PostService.delete(session, post_id)
    return SuccessResponse()
