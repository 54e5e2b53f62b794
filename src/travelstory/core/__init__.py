"""Core utilities and configuration for Travel Story.

This module contains:
- Configuration and settings management
- Error types carrying their HTTP status
- Security utilities (password hashing, bearer tokens)
"""
from .config import Settings, get_settings
from .exceptions import (
    APIError,
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .security import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenError,
    TokenService,
    hash_password,
    verify_password,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "APIError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "InvalidCredentialsError",
    "InternalError",
    # Security - Password
    "hash_password",
    "verify_password",
    # Security - Tokens
    "TokenService",
    "TokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
]
