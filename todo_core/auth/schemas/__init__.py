"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AccessTokenResponse,
    RefreshRequest,
    TokenPayload,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    encodable,
    required,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "RefreshRequest",
    "TokenPayload",
    "TokenResponse",
    "AccessTokenResponse",
    "encodable",
    "required",
]
