"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

# Settings are read at import time; configure them before importing the app.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DISABLE_BOOTSTRAP_USERS"] = "true"

from typing import Dict, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from blogapi.core.config import settings  # noqa: E402
from blogapi.db.session import get_session  # noqa: E402
from blogapi.main import app  # noqa: E402
from blogapi.models.post import Post  # noqa: E402
from blogapi.models.user import User, UserRole  # noqa: E402
from blogapi.schemas.user import UserCreate  # noqa: E402
from blogapi.services.post_service import PostService  # noqa: E402
from blogapi.services.user_service import UserService  # noqa: E402


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def login(client: TestClient, email: str, password: str) -> str:
    response = client.post(
        f"{settings.API_PREFIX}/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """
    Create a regular test user.
    """
    user_create = UserCreate(
        name="Test User",
        email="test@example.com",
        password="testpassword123",
    )
    return UserService.create(session, user_create)


@pytest.fixture(name="other_user")
def other_user_fixture(session: Session) -> User:
    """
    Create a second regular user with no relation to the test content.
    """
    user_create = UserCreate(
        name="Other User",
        email="other@example.com",
        password="otherpassword123",
    )
    return UserService.create(session, user_create)


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    """
    Create the admin user.
    """
    user_create = UserCreate(
        name="Admin User",
        email="admin@example.com",
        password="adminpassword123",
    )
    return UserService.create(session, user_create, role=UserRole.ADMIN)


@pytest.fixture(name="user_token")
def user_token_fixture(client: TestClient, test_user: User) -> str:
    """
    Get an access token for a regular user.
    """
    return login(client, "test@example.com", "testpassword123")


@pytest.fixture(name="other_token")
def other_token_fixture(client: TestClient, other_user: User) -> str:
    return login(client, "other@example.com", "otherpassword123")


@pytest.fixture(name="admin_token")
def admin_token_fixture(client: TestClient, test_admin: User) -> str:
    """
    Get an access token for the admin user.
    """
    return login(client, "admin@example.com", "adminpassword123")


@pytest.fixture(name="admin_post")
def admin_post_fixture(session: Session, test_admin: User) -> Post:
    """
    Create a post authored by the admin.
    """
    return PostService.create(
        session,
        author=test_admin,
        title="Hello World",
        content="The first post on the blog.",
    )


@pytest.fixture(name="user_post")
def user_post_fixture(session: Session, test_user: User) -> Post:
    """
    Create a post whose author is a regular user.

    Regular users cannot create posts over HTTP, but a post may still be
    authored by someone who is no longer admin.
    """
    return PostService.create(
        session,
        author=test_user,
        title="Written by a regular user",
        content="Authored before a demotion.",
    )
