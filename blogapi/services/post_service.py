"""
Post service layer: posts and the comments they own.

Comments are only reachable through their post. Appending is a single
INSERT and removal a single DELETE scoped to the post, so concurrent
comment writes on the same post never overwrite each other.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from blogapi.core.exceptions import NotFound
from blogapi.core.logging import get_logger
from blogapi.models.post import Comment, Post
from blogapi.models.user import User

logger = get_logger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostService:
    """Service class for post and comment operations."""

    @staticmethod
    def create(session: Session, author: User, title: str, content: str) -> Post:
        """
        Create a post with an empty comment sequence.

        Args:
            session: Database session
            author: User whose id, name and email are snapshotted onto the post
            title: Post title
            content: Post body

        Returns:
            Created post
        """
        post = Post(
            title=title,
            content=content,
            author_id=author.id,
            author_name=author.name,
            author_email=author.email,
        )
        session.add(post)
        session.commit()
        session.refresh(post)
        logger.info(f"Post {post.id} created by {author.id}")
        return post

    @staticmethod
    def list_posts(session: Session, query: Optional[str] = None) -> List[Post]:
        """
        List posts newest first, optionally filtered by a search term.

        The term is matched case-insensitively against title, content and
        author name.
        """
        statement = select(Post).options(selectinload(Post.comments))  # type: ignore[arg-type]
        if query and query.strip():
            pattern = f"%{_escape_like(query.strip())}%"
            statement = statement.where(
                or_(
                    col(Post.title).ilike(pattern, escape="\\"),
                    col(Post.content).ilike(pattern, escape="\\"),
                    col(Post.author_name).ilike(pattern, escape="\\"),
                )
            )
        statement = statement.order_by(col(Post.created_at).desc())
        return list(session.exec(statement).all())

    @staticmethod
    def get_by_id(session: Session, post_id: str) -> Post:
        """
        Retrieve a post by ID.

        Raises:
            NotFound: If the post does not exist
        """
        post = session.get(Post, post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    @staticmethod
    def update(session: Session, post_id: str, title: str, content: str) -> Post:
        """
        Replace title and content. Author snapshot and comments are untouched.

        Raises:
            NotFound: If the post does not exist
        """
        post = PostService.get_by_id(session, post_id)
        post.title = title
        post.content = content
        post.updated_at = datetime.now(timezone.utc)
        session.add(post)
        session.commit()
        session.refresh(post)
        logger.info(f"Post {post.id} updated")
        return post

    @staticmethod
    def delete(session: Session, post_id: str) -> None:
        """
        Delete a post and all of its comments in one transaction.

        Raises:
            NotFound: If the post does not exist
        """
        post = PostService.get_by_id(session, post_id)
        session.delete(post)
        session.commit()
        logger.info(f"Post {post_id} deleted")

    @staticmethod
    def get_comment(session: Session, post_id: str, comment_id: str) -> Comment:
        """
        Retrieve a comment within a post.

        Raises:
            NotFound: If the post, or the comment within it, does not exist
        """
        PostService.get_by_id(session, post_id)
        statement = select(Comment).where(Comment.post_id == post_id, Comment.id == comment_id)
        comment = session.exec(statement).first()
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    @staticmethod
    def add_comment(session: Session, post_id: str, author: User, content: str) -> Comment:
        """
        Append a comment to a post.

        Raises:
            NotFound: If the post does not exist
        """
        PostService.get_by_id(session, post_id)
        comment = Comment(
            post_id=post_id,
            content=content,
            author_id=author.id,
            author_name=author.name,
        )
        session.add(comment)
        try:
            PostService._touch(session, post_id)
            session.commit()
        except IntegrityError:
            # Post deleted after the existence check; the foreign key rejects the row.
            session.rollback()
            raise NotFound("Post not found")
        session.refresh(comment)
        logger.info(f"Comment {comment.id} added to post {post_id} by {author.id}")
        return comment

    @staticmethod
    def remove_comment(session: Session, post_id: str, comment_id: str) -> None:
        """
        Remove one comment from a post, keeping the order of the rest.

        Raises:
            NotFound: If the post, or the comment within it, does not exist
        """
        PostService.get_by_id(session, post_id)
        result = session.exec(  # type: ignore[call-overload]
            delete(Comment).where(
                col(Comment.post_id) == post_id,
                col(Comment.id) == comment_id,
            )
        )
        if result.rowcount == 0:
            raise NotFound("Comment not found")
        PostService._touch(session, post_id)
        session.commit()
        logger.info(f"Comment {comment_id} removed from post {post_id}")

    @staticmethod
    def _touch(session: Session, post_id: str) -> None:
        session.exec(  # type: ignore[call-overload]
            update(Post)
            .where(col(Post.id) == post_id)
            .values(updated_at=datetime.now(timezone.utc))
        )
