"""User and token schemas.

Request models define the accepted fields: anything else in the payload is
dropped, strings are trimmed and email is lower-cased. Response models
use camelCase aliases on the wire (`createdAt`, `accessToken`) and have no
password field at all.
"""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 50
PASSWORD_MAX_BYTES = 72  # bcrypt limit
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d@$!%*?&]")
_PASSWORD_CLASSES = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def _check_password_length(v: str) -> str:
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes")
    return v


def _check_name(v: str) -> str:
    v = v.strip()
    if len(v) < NAME_MIN_LENGTH:
        raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters long")
    if len(v) > NAME_MAX_LENGTH:
        raise ValueError(f"Name must not exceed {NAME_MAX_LENGTH} characters")
    return v


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v is not None else v


# ============================================================================
# Request Schemas
# ============================================================================


class RegisterRequest(_Request):
    """Self-registration request."""

    email: EmailStr
    password: str
    name: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Enforce length, character classes and leading character."""
        _check_password_length(v)
        if len(v) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"Password must not exceed {PASSWORD_MAX_LENGTH} characters")
        if not _PASSWORD_PATTERN.match(v):
            raise ValueError("Password must contain uppercase, lowercase, and number")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)


class CreateUserRequest(RegisterRequest):
    """Request from an authenticated user adding a user they will own."""


class LoginRequest(_Request):
    """Login credentials.

    Password rules are enforced at registration; here it only has to be present.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateUserRequest(_Request):
    """Partial update; every field is optional."""

    email: EmailStr | None = None
    password: str | None = None
    name: str | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if v is None:
            return v
        _check_password_length(v)
        if not _PASSWORD_CLASSES.match(v):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _check_name(v) if v is not None else v


# ============================================================================
# Response Schemas
# ============================================================================


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        """Dump with camelCase keys for the wire."""
        return self.model_dump(by_alias=True)


class UserResponse(_Response):
    """Outward-facing user record. Never carries the password hash."""

    id: str
    email: str
    name: str
    created_by: str | None = None
    created_at: str
    updated_at: str | None = None


class AuthResponse(_Response):
    """Response of register and login: the user plus a bearer token."""

    user: UserResponse
    access_token: str


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str
    email: str
    iat: int
    exp: int
