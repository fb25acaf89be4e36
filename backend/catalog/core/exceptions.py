"""Custom exception classes for the application"""

from typing import Optional, Dict, Any


class BaseAPIException(Exception):
    """Base exception for all API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_SERVER_ERROR",
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


# Authentication Errors
class AuthenticationFailedError(BaseAPIException):
    """Invalid username or password (never says which)"""
    def __init__(self):
        super().__init__(
            "Invalid username or password",
            status_code=401,
            error_code="AUTHENTICATION_FAILED",
        )


class UnauthorizedError(BaseAPIException):
    """Request carries no usable bearer credential"""
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            message,
            status_code=401,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Token Errors
class TokenError(BaseAPIException):
    """Base class for token problems"""


class TokenInvalidError(TokenError):
    """Token is malformed or its signature does not verify"""
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, status_code=401, error_code="TOKEN_INVALID")


class TokenExpiredError(TokenError):
    """Token signature is fine but its lifetime has passed"""
    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, status_code=403, error_code="TOKEN_EXPIRED")


class TokenNotRecognizedError(TokenError):
    """Refresh token is not in the store (never issued or already rotated out)"""
    def __init__(self, message: str = "Refresh token is not recognized"):
        super().__init__(message, status_code=403, error_code="TOKEN_NOT_RECOGNIZED")


# Authorization Errors
class ForbiddenError(BaseAPIException):
    """Authenticated but lacking the required role"""
    def __init__(self, message: str = "You do not have permission to access this resource"):
        super().__init__(message, status_code=403, error_code="FORBIDDEN")


# Registration Errors
class UsernameTakenError(BaseAPIException):
    """Username already registered"""
    def __init__(self, username: str):
        super().__init__(
            "Username is already taken",
            status_code=400,
            error_code="USERNAME_TAKEN",
            details={"username": username},
        )


class EmailTakenError(BaseAPIException):
    """Email already registered"""
    def __init__(self):
        super().__init__(
            "Email is already in use",
            status_code=400,
            error_code="EMAIL_TAKEN",
        )


# Resource Errors
class ResourceNotFoundError(BaseAPIException):
    """Resource not found"""
    def __init__(self, resource: str):
        super().__init__(f"{resource} not found", status_code=404, error_code="RESOURCE_NOT_FOUND")


# System Errors
class ConfigurationError(BaseAPIException):
    """Server is misconfigured (e.g. reference data missing); not recoverable per request"""
    def __init__(self, message: str = "Server configuration error"):
        super().__init__(message, status_code=500, error_code="CONFIGURATION_ERROR")
