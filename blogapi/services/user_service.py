"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and database operations.

Password hashing and the single-admin check run explicitly inside the write
path. The unique ``admin_slot`` column backs the check, so two concurrent
promotions cannot both commit.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from blogapi.core.exceptions import ConflictError, InvariantViolation, NotFound, Unauthenticated
from blogapi.core.logging import get_logger
from blogapi.core.security import get_password_hash, pwd_context, verify_password
from blogapi.models.user import ADMIN_SLOT, User, UserRole
from blogapi.schemas.user import UserCreate, UserUpdate, clean_email

logger = get_logger(__name__)


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[User]:
        """
        Retrieve a user by email address (trimmed, case-insensitive).

        Args:
            session: Database session
            email: Email address to search for

        Returns:
            User if found, None otherwise
        """
        statement = select(User).where(User.email == clean_email(email))
        return session.exec(statement).first()

    @staticmethod
    def get_by_id(session: Session, user_id: str) -> User:
        """
        Retrieve a user by ID.

        Raises:
            NotFound: If no user has this ID
        """
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def get_admin(session: Session) -> Optional[User]:
        statement = select(User).where(User.admin_slot == ADMIN_SLOT)
        return session.exec(statement).first()

    @staticmethod
    def list_users(session: Session) -> List[User]:
        statement = select(User).order_by(User.created_at)
        return list(session.exec(statement).all())

    @staticmethod
    def ensure_single_admin(session: Session, user_id: Optional[str] = None) -> None:
        """
        Check that no user other than ``user_id`` holds the admin role.

        Raises:
            InvariantViolation: If another admin exists
        """
        statement = select(User).where(User.admin_slot == ADMIN_SLOT)
        if user_id is not None:
            statement = statement.where(User.id != user_id)
        if session.exec(statement).first() is not None:
            raise InvariantViolation("Only one admin is allowed")

    @staticmethod
    def create(session: Session, user_create: UserCreate, role: UserRole = UserRole.USER) -> User:
        """
        Create a new user with hashed password.

        Args:
            session: Database session
            user_create: User creation data
            role: User role (defaults to USER)

        Returns:
            Created user instance

        Raises:
            ConflictError: If the email is already registered
            InvariantViolation: If role is ADMIN and an admin already exists
        """
        if UserService.get_by_email(session, user_create.email) is not None:
            raise ConflictError("User already exists")
        if role == UserRole.ADMIN:
            UserService.ensure_single_admin(session)

        db_user = User(
            name=user_create.name,
            email=clean_email(user_create.email),
            hashed_password=get_password_hash(user_create.password),
            role=role,
            admin_slot=ADMIN_SLOT if role == UserRole.ADMIN else None,
        )
        session.add(db_user)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            # Lost a race: tell the caller which constraint it collided with.
            if UserService.get_by_email(session, user_create.email) is not None:
                raise ConflictError("User already exists")
            raise InvariantViolation("Only one admin is allowed")
        session.refresh(db_user)
        return db_user

    @staticmethod
    def register(session: Session, user_create: UserCreate) -> User:
        """Register a regular user."""
        user = UserService.create(session, user_create, role=UserRole.USER)
        logger.info(f"New user registered: {user.email} (ID: {user.id})")
        return user

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        Unknown emails and wrong passwords fail the same way.

        Raises:
            Unauthenticated: If the credentials do not match a user
        """
        user = UserService.get_by_email(session, email)
        if user is None:
            pwd_context.dummy_verify()
            raise Unauthenticated("Invalid credentials")
        if not verify_password(password, user.hashed_password):
            raise Unauthenticated("Invalid credentials")
        return user

    @staticmethod
    def set_role(session: Session, user_id: str, role: UserRole) -> User:
        """
        Change a user's role, keeping at most one admin.

        Raises:
            NotFound: If the user does not exist
            InvariantViolation: If promoting while another user is admin
        """
        user = UserService.get_by_id(session, user_id)
        if user.role == role:
            return user
        if role == UserRole.ADMIN:
            UserService.ensure_single_admin(session, user_id=user.id)

        user.role = role
        user.admin_slot = ADMIN_SLOT if role == UserRole.ADMIN else None
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise InvariantViolation("Only one admin is allowed")
        session.refresh(user)
        logger.info(f"User {user.id} role set to {role.value}")
        return user

    @staticmethod
    def update_profile(session: Session, user_id: str, user_update: UserUpdate) -> User:
        """
        Update name, bio and profile picture.

        Author snapshots on existing posts and comments are left as they were.
        """
        user = UserService.get_by_id(session, user_id)
        for field, value in user_update.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(user, field, value)
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
