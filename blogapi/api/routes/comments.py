"""
Comment routes. Comments are addressed only through their parent post.
"""

from fastapi import APIRouter, status

from blogapi.api.deps import ClaimsDep, SessionDep
from blogapi.core.permissions import Action, Ownership, authorize
from blogapi.schemas.post import CommentCreate, CommentResponse, SuccessResponse
from blogapi.services.post_service import PostService
from blogapi.services.user_service import UserService

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: str,
    comment_in: CommentCreate,
    claims: ClaimsDep,
    session: SessionDep,
) -> CommentResponse:
    """
    Comment on a post. Any authenticated user may comment.

    Raises:
        NotFound: If the post does not exist
    """
    PostService.get_by_id(session, post_id)
    authorize(claims, Action.CREATE_COMMENT)
    author = UserService.get_by_id(session, claims.sub)
    comment = PostService.add_comment(session, post_id, author=author, content=comment_in.content)
    return CommentResponse.from_model(comment)


@router.delete("/{comment_id}", response_model=SuccessResponse)
def delete_comment(
    post_id: str,
    comment_id: str,
    claims: ClaimsDep,
    session: SessionDep,
) -> SuccessResponse:
    """
    Delete a comment.

    Allowed for the comment's author, the post's author and the admin.
    A missing post or comment is reported before any permission check.
    """
    post = PostService.get_by_id(session, post_id)
    comment = PostService.get_comment(session, post_id, comment_id)
    authorize(
        claims,
        Action.DELETE_COMMENT,
        Ownership(post_author_id=post.author_id, comment_author_id=comment.author_id),
    )
    PostService.remove_comment(session, post_id, comment_id)
    return SuccessResponse()
