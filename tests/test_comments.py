"""
Tests for comment endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from blogapi.core.config import settings
from blogapi.models.post import Comment, Post
from blogapi.models.user import User
from blogapi.services.post_service import PostService
from conftest import auth_headers


def comments_url(post_id: str) -> str:
    return f"{settings.API_PREFIX}/posts/{post_id}/comments"


@pytest.fixture(name="user_comment")
def user_comment_fixture(session: Session, user_post: Post, other_user: User) -> Comment:
    """A comment by other_user on a post authored by test_user."""
    return PostService.add_comment(session, user_post.id, author=other_user, content="Great read")


def test_add_comment(client: TestClient, user_token: str, test_user: User, admin_post: Post) -> None:
    response = client.post(
        comments_url(admin_post.id),
        json={"content": "  Nice post!  "},
        headers=auth_headers(user_token),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["content"] == "Nice post!"
    assert data["author"] == {"id": test_user.id, "name": "Test User"}
    assert isinstance(data["id"], str)

    post = client.get(f"{settings.API_PREFIX}/posts/{admin_post.id}").json()
    assert [c["id"] for c in post["comments"]] == [data["id"]]


def test_comments_are_appended_in_order(client: TestClient, user_token: str, other_token: str,
                                        admin_post: Post) -> None:
    ids = []
    for token, text in [(user_token, "one"), (other_token, "two"), (user_token, "three")]:
        response = client.post(comments_url(admin_post.id), json={"content": text}, headers=auth_headers(token))
        ids.append(response.json()["id"])

    post = client.get(f"{settings.API_PREFIX}/posts/{admin_post.id}").json()
    assert [c["id"] for c in post["comments"]] == ids
    assert [c["content"] for c in post["comments"]] == ["one", "two", "three"]


def test_add_comment_requires_token(client: TestClient, admin_post: Post) -> None:
    response = client.post(comments_url(admin_post.id), json={"content": "anon"})
    assert response.status_code == 401


def test_add_comment_to_missing_post(client: TestClient, user_token: str) -> None:
    response = client.post(comments_url("does-not-exist"), json={"content": "hi"}, headers=auth_headers(user_token))
    assert response.status_code == 404
    assert response.json() == {"error": "Post not found"}


def test_add_empty_comment(client: TestClient, user_token: str, admin_post: Post) -> None:
    response = client.post(comments_url(admin_post.id), json={"content": "   "}, headers=auth_headers(user_token))
    assert response.status_code == 400


def test_comment_author_can_delete(client: TestClient, other_token: str, user_post: Post,
                                   user_comment: Comment) -> None:
    response = client.delete(
        f"{comments_url(user_post.id)}/{user_comment.id}",
        headers=auth_headers(other_token),
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_post_author_can_delete(client: TestClient, user_token: str, user_post: Post,
                                user_comment: Comment) -> None:
    response = client.delete(
        f"{comments_url(user_post.id)}/{user_comment.id}",
        headers=auth_headers(user_token),
    )
    assert response.status_code == 200


def test_admin_can_delete(client: TestClient, admin_token: str, user_post: Post,
                          user_comment: Comment) -> None:
    response = client.delete(
        f"{comments_url(user_post.id)}/{user_comment.id}",
        headers=auth_headers(admin_token),
    )
    assert response.status_code == 200


def test_unrelated_user_cannot_delete(client: TestClient, session: Session, user_post: Post,
                                      user_comment: Comment) -> None:
    client.post(
        f"{settings.API_PREFIX}/auth/register",
        json={"name": "Stranger", "email": "stranger@example.com", "password": "password123"},
    )
    token = client.post(
        f"{settings.API_PREFIX}/auth/login",
        json={"email": "stranger@example.com", "password": "password123"},
    ).json()["token"]

    response = client.delete(f"{comments_url(user_post.id)}/{user_comment.id}", headers=auth_headers(token))
    assert response.status_code == 403
    assert response.json() == {"error": "Not authorized"}

    post = client.get(f"{settings.API_PREFIX}/posts/{user_post.id}").json()
    assert len(post["comments"]) == 1


def test_delete_missing_comment_is_404_before_403(client: TestClient, other_token: str,
                                                  admin_post: Post) -> None:
    response = client.delete(f"{comments_url(admin_post.id)}/does-not-exist", headers=auth_headers(other_token))
    assert response.status_code == 404
    assert response.json() == {"error": "Comment not found"}


def test_delete_comment_on_missing_post(client: TestClient, admin_token: str) -> None:
    response = client.delete(f"{comments_url('does-not-exist')}/whatever", headers=auth_headers(admin_token))
    assert response.status_code == 404
    assert response.json() == {"error": "Post not found"}


def test_delete_comment_via_wrong_post(client: TestClient, admin_token: str, admin_post: Post,
                                       user_post: Post, user_comment: Comment) -> None:
    response = client.delete(
        f"{comments_url(admin_post.id)}/{user_comment.id}",
        headers=auth_headers(admin_token),
    )
    assert response.status_code == 404


def test_delete_keeps_order_of_remaining(client: TestClient, session: Session, admin_token: str,
                                         admin_post: Post, test_user: User) -> None:
    ids = [
        PostService.add_comment(session, admin_post.id, author=test_user, content=text).id
        for text in ("a", "b", "c")
    ]

    client.delete(f"{comments_url(admin_post.id)}/{ids[1]}", headers=auth_headers(admin_token))

    post = client.get(f"{settings.API_PREFIX}/posts/{admin_post.id}").json()
    assert [c["id"] for c in post["comments"]] == [ids[0], ids[2]]
