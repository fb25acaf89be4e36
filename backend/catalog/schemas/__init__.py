"""Pydantic schemas for API validation"""

from catalog.schemas.user import (
    Identity,
    LoginRequest,
    SignupRequest,
    TokenRefreshRequest,
    LoginResponse,
    TokenRefreshResponse,
    UserResponse,
)
from catalog.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from catalog.schemas.response import APIResponse, ErrorResponse, HealthResponse

__all__ = [
    "Identity", "LoginRequest", "SignupRequest", "TokenRefreshRequest",
    "LoginResponse", "TokenRefreshResponse", "UserResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "APIResponse", "ErrorResponse", "HealthResponse",
]
