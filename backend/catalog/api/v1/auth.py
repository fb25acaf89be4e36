"""Authentication routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from catalog.core.database import get_db
from catalog.schemas.user import (
    Identity,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    TokenRefreshRequest,
    TokenRefreshResponse,
    UserResponse,
)
from catalog.schemas.response import APIResponse
from catalog.services.auth_service import auth_service
from catalog.services.user_service import user_service
from catalog.api.deps import get_current_identity

router = APIRouter()


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login endpoint - authenticate user and return access + refresh tokens

    Args:
        credentials: Username and password
        db: Database session

    Returns:
        Tokens and user info
    """
    return auth_service.login(db, credentials.username, credentials.password)


@router.post("/register", response_model=APIResponse, status_code=status.HTTP_200_OK)
def register(
    signup: SignupRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user; roles default to USER

    Args:
        signup: Username, email, password and optional role names
        db: Database session

    Returns:
        Success message
    """
    auth_service.register(db, signup.username, signup.email, signup.password, signup.roles)
    return APIResponse(message="User registered successfully")


@router.post("/refresh", response_model=TokenRefreshResponse)
def refresh_token(
    req: TokenRefreshRequest,
    db: Session = Depends(get_db),
):
    """
    Rotate a refresh token

    The presented refresh token is consumed; the response carries the only
    refresh token that will be accepted next.
    """
    return auth_service.refresh(db, req.refresh_token)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Logout endpoint - revoke the caller's refresh token

    Access tokens already handed out stay valid until they expire.
    """
    revoked = auth_service.logout(db, identity)

    return {
        "success": True,
        "message": "Logged out successfully",
        "refresh_token_revoked": revoked > 0
    }


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get current user information"""
    user = user_service.get_user_by_id(db, identity.id)
    return UserResponse(
        id=identity.id,
        username=identity.username,
        email=identity.email,
        roles=identity.roles,
        created_at=user.created_at if user else None,
    )
