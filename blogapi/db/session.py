"""
Database session management using SQLModel.
Provides session factory and dependency injection for FastAPI routes.

Every storage call is bounded by ``DB_TIMEOUT_SECONDS``; a stalled database
surfaces as an error (and a 500 response) rather than a hung request.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from blogapi.core.config import settings

timeout = settings.DB_TIMEOUT_SECONDS

if settings.is_sqlite:
    # SQLite-specific configuration; timeout bounds waits on the write lock
    engine = create_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False, "timeout": timeout},
    )
else:
    # PostgreSQL configuration with connection pooling
    # pool_pre_ping ensures connections are alive before using them
    engine = create_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=timeout,
        connect_args={
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        },
    )


def get_session() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session for FastAPI routes.
    Services commit their own writes; uncommitted work is rolled back on close.

    Yields:
        Database session instance
    """
    with Session(engine) as session:
        yield session
