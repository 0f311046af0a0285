"""
Post and comment models.

A post owns an ordered sequence of comments. Comments have no life outside
their post: they are created and removed through ``PostService`` and are
deleted together with the post. Author fields are snapshots taken when the
row is created and are not kept in sync with later user edits.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(SQLModel, table=True):
    """Blog post with an embedded author snapshot."""

    __tablename__ = "posts"  # type: ignore

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = Field(max_length=500)
    content: str

    # Author snapshot
    author_id: str = Field(index=True)
    author_name: str
    author_email: str

    created_at: datetime = Field(default_factory=_now, index=True)
    updated_at: datetime = Field(default_factory=_now)

    comments: List["Comment"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Comment.seq",
        },
    )


class Comment(SQLModel, table=True):
    """
    Comment on a post.

    ``seq`` is an autoincrement key that records insertion order; ``id`` is
    the public identifier used in URLs.
    """

    __tablename__ = "comments"  # type: ignore

    seq: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(default_factory=lambda: str(uuid4()), unique=True, index=True)
    post_id: str = Field(foreign_key="posts.id", index=True, ondelete="CASCADE")
    content: str

    # Author snapshot
    author_id: str = Field(index=True)
    author_name: str

    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    post: Optional[Post] = Relationship(back_populates="comments")
