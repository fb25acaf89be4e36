"""API dependencies - authentication and authorization"""

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Callable, Optional

from catalog.core.database import get_db
from catalog.core.security import access_token_codec
from catalog.core.exceptions import ForbiddenError, TokenError, UnauthorizedError
from catalog.models.role import RoleName
from catalog.schemas.user import Identity
from catalog.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme; missing credentials are reported by us, not FastAPI
security = HTTPBearer(auto_error=False)


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Resolve the caller's identity from the bearer access token

    Args:
        request: Current request; the identity is attached to request.state
        credentials: HTTP Bearer credentials, None when absent
        db: Database session

    Returns:
        Identity with roles resolved from storage

    Raises:
        UnauthorizedError: no token, invalid or expired token, or unknown subject
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    try:
        username = access_token_codec.validate(credentials.credentials)
    except TokenError as exc:
        logger.info(f"Rejected access token: {exc.error_code}")
        raise UnauthorizedError("Invalid or expired token")

    user = user_service.get_user_by_username(db, username)
    if not user:
        raise UnauthorizedError("User not found")

    identity = user_service.to_identity(user)
    request.state.identity = identity
    return identity


def require_roles(*roles: RoleName) -> Callable[..., Identity]:
    """
    Build a dependency admitting identities that hold any of the given roles

    Raises:
        ForbiddenError: authenticated but holding none of the roles
    """
    required = {role.value for role in roles}

    def _check(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not any(identity.has_role(role) for role in required):
            logger.warning(
                f"Forbidden: {identity.username} lacks {', '.join(sorted(required))}"
            )
            raise ForbiddenError()
        return identity

    return _check


get_current_admin = require_roles(RoleName.ADMIN)
