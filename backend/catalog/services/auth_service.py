"""Authentication service - login, registration and refresh-token rotation"""

from sqlalchemy.orm import Session
from typing import Iterable, Optional
from catalog.core.exceptions import TokenNotRecognizedError
from catalog.core.security import access_token_codec
from catalog.schemas.user import Identity, LoginResponse, TokenRefreshResponse
from catalog.services.role_service import role_service
from catalog.services.token_service import refresh_token_service
from catalog.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """Composes credential checks, access tokens and the refresh token store"""

    @staticmethod
    def login(db: Session, username: str, password: str) -> LoginResponse:
        """
        Authenticate and issue an access token plus a fresh refresh token

        Raises:
            AuthenticationFailedError: bad credentials
        """
        identity = user_service.authenticate_user(db, username, password)
        access_token = access_token_codec.mint(identity.username)
        refresh_token = refresh_token_service.issue_or_rotate(db, identity.id)

        logger.info(f"User logged in: {identity.username}")
        return LoginResponse(
            access_token=access_token,
            refresh_token=refresh_token.token,
            expires_in=access_token_codec.expires_in,
            user_id=identity.id,
            username=identity.username,
            email=identity.email,
            roles=identity.roles,
        )

    @staticmethod
    def register(
        db: Session,
        username: str,
        email: str,
        password: str,
        roles: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Create an account with the requested (or default) roles

        Raises:
            UsernameTakenError / EmailTakenError: uniqueness violated
            ConfigurationError: role reference data missing
        """
        role_names = role_service.resolve_requested_roles(roles)
        role_rows = role_service.get_roles(db, role_names)
        user_service.create_user(db, username, email, password, role_rows)

    @staticmethod
    def refresh(db: Session, presented_token: str) -> TokenRefreshResponse:
        """
        Exchange a refresh token for a new access token and a new refresh token.

        The presented token is consumed even when still valid; a second use
        fails with TokenNotRecognizedError.

        Raises:
            TokenNotRecognizedError: token not in the store
            TokenExpiredError: token expired (and is now deleted)
        """
        record = refresh_token_service.find_by_token(db, presented_token, for_update=True)
        if record is None:
            logger.warning("Refresh attempted with an unrecognized token")
            raise TokenNotRecognizedError("Refresh token is not in database")

        record = refresh_token_service.verify_not_expired(db, record)

        user = user_service.get_user_by_id(db, record.user_id)
        if user is None:
            raise TokenNotRecognizedError("Refresh token is not in database")

        access_token = access_token_codec.mint(user.username)
        rotated = refresh_token_service.issue_or_rotate(db, user.id)

        logger.info(f"Refresh token rotated for user: {user.username}")
        return TokenRefreshResponse(access_token=access_token, refresh_token=rotated.token)

    @staticmethod
    def logout(db: Session, identity: Identity) -> int:
        """Drop the caller's refresh token; access tokens simply run out"""
        count = refresh_token_service.revoke(db, identity.id)
        logger.info(f"User logged out: {identity.username}")
        return count


# Singleton instance
auth_service = AuthService()
