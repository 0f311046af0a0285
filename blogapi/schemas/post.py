"""
Post and comment schemas.

Responses nest the author snapshot as ``author: {id, name[, email]}`` and
list comments in insertion order.
"""

from datetime import datetime
from typing import Annotated, List

from pydantic import StringConstraints

from blogapi.models.post import Comment, Post
from blogapi.schemas.base import APIModel

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
Text = Annotated[str, StringConstraints(min_length=1)]
TrimmedText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class PostCreate(APIModel):
    title: Title
    content: Text


class PostUpdate(PostCreate):
    pass


class CommentCreate(APIModel):
    content: TrimmedText


class PostAuthor(APIModel):
    id: str
    name: str
    email: str


class CommentAuthor(APIModel):
    id: str
    name: str


class CommentResponse(APIModel):
    id: str
    content: str
    author: CommentAuthor
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            content=comment.content,
            author=CommentAuthor(id=comment.author_id, name=comment.author_name),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class PostResponse(APIModel):
    id: str
    title: str
    content: str
    author: PostAuthor
    comments: List[CommentResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=PostAuthor(id=post.author_id, name=post.author_name, email=post.author_email),
            comments=[CommentResponse.from_model(c) for c in post.comments],
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class SuccessResponse(APIModel):
    success: bool = True
