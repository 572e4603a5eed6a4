"""Authentication Pydantic schemas for API validation."""

from .user import (
    AuthResponse,
    CreateUserRequest,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "CreateUserRequest",
    "LoginRequest",
    "RegisterRequest",
    "TokenPayload",
    "UpdateUserRequest",
    "UserResponse",
]
