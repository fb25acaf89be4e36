"""User and authentication schemas"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Set
from datetime import datetime


class Identity(BaseModel):
    """Authenticated principal: who the caller is and which roles they hold"""
    id: int
    username: str
    email: str
    roles: List[str] = []

    def has_role(self, role: str) -> bool:
        return role in self.roles


class LoginRequest(BaseModel):
    """User login schema"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=3, max_length=128)


class SignupRequest(BaseModel):
    """User registration schema"""
    username: str = Field(..., min_length=3, max_length=50, pattern=r'^[a-zA-Z0-9_.-]+$')
    email: EmailStr
    password: str = Field(..., min_length=3, max_length=128)
    roles: Optional[Set[str]] = None

    @field_validator("email")
    @classmethod
    def email_fits_column(cls, v):
        """Lowercase the address; the users.email column holds 100 characters"""
        if len(v) > 100:
            raise ValueError("Email must be at most 100 characters")
        return v.lower()


class TokenRefreshRequest(BaseModel):
    """Refresh token exchange request"""
    refresh_token: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Tokens plus the identity they were issued for"""
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user_id: int
    username: str
    email: str
    roles: List[str]


class TokenRefreshResponse(BaseModel):
    """Rotated token pair"""
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class UserResponse(BaseModel):
    """User response schema"""
    id: int
    username: str
    email: str
    roles: List[str]
    created_at: Optional[datetime] = None
