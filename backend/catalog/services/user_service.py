"""User service - credential verification and account creation"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from catalog.models.role import Role
from catalog.models.user import User
from catalog.schemas.user import Identity
from catalog.core.security import get_password_hash, verify_password, dummy_password_hash
from catalog.core.exceptions import (
    AuthenticationFailedError,
    EmailTakenError,
    UsernameTakenError,
)
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management"""

    @staticmethod
    def to_identity(user: User) -> Identity:
        return Identity(id=user.id, username=user.username, email=user.email, roles=user.role_names)

    @staticmethod
    def authenticate_user(db: Session, username: str, password: str) -> Identity:
        """
        Verify a username/password pair

        Args:
            db: Database session
            username: Username
            password: Plain text password

        Returns:
            Identity of the authenticated user

        Raises:
            AuthenticationFailedError: unknown user or wrong password (indistinguishable)
        """
        user = UserService.get_user_by_username(db, username)

        if user is None:
            # Burn the same bcrypt cost as a real comparison.
            verify_password(password, dummy_password_hash())
            logger.warning(f"Failed login for username: {username}")
            raise AuthenticationFailedError()

        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for username: {username}")
            raise AuthenticationFailedError()

        logger.info(f"User authenticated: {username}")
        return UserService.to_identity(user)

    @staticmethod
    def create_user(
        db: Session,
        username: str,
        email: str,
        password: str,
        roles: List[Role],
    ) -> User:
        """
        Create new user

        Args:
            db: Database session
            username: Unique username
            email: Unique email
            password: Plain text password, hashed before storage
            roles: Role rows to attach

        Returns:
            Created user

        Raises:
            UsernameTakenError / EmailTakenError: uniqueness violated, either
                before insert or by a concurrent insert at commit
        """
        if UserService.get_user_by_username(db, username):
            raise UsernameTakenError(username)
        if UserService.get_user_by_email(db, email):
            raise EmailTakenError()

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            roles=list(roles),
        )

        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Concurrent registration collided for username: {username}")
            if UserService.get_user_by_username(db, username):
                raise UsernameTakenError(username)
            if UserService.get_user_by_email(db, email):
                raise EmailTakenError()
            raise
        db.refresh(user)

        logger.info(f"Created user: {user.username} (roles: {', '.join(user.role_names)})")
        return user

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()


# Singleton instance
user_service = UserService()
