"""Credential store and verifier.

Password hashing, user creation and credential verification on top of
the Core user operations. Functions take a Core so callers decide the
transaction boundary:

    with db.get_core(atomic=True) as core:
        user = service.create_user(core, data, created_by=None, rounds=10)

    user = service.validate_credentials(db.get_core(), email, password)
"""

import logging
import sqlite3

import bcrypt

from ..db import Core
from ..exceptions import NotFoundOrForbidden
from .schemas import RegisterRequest, UpdateUserRequest, UserResponse

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
MAX_BCRYPT_BYTES = 72


# ============================================================================
# Password Hashing
# ============================================================================


def _encode(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes and newer releases refuse more
    return password.encode("utf-8")[:MAX_BCRYPT_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain text password
        rounds: bcrypt work factor

    Returns:
        60-character bcrypt hash string
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a password against a stored hash (constant time)."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a valid bcrypt hash
        logger.error("Stored password hash is malformed")
        return False


# ============================================================================
# Record conversion
# ============================================================================


def row_to_user_response(row: sqlite3.Row) -> UserResponse:
    """Convert a users row to UserResponse, dropping the password hash."""
    return UserResponse(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


# ============================================================================
# Store operations
# ============================================================================


def create_user(
    core: Core,
    data: RegisterRequest,
    created_by: str | None = None,
    rounds: int = DEFAULT_ROUNDS
) -> UserResponse:
    """Hash the password and persist a new user.

    Args:
        core: Core instance (use atomic=True so the insert commits)
        data: Validated registration data
        created_by: Acting user's id, or None for self-registration
        rounds: bcrypt work factor

    Returns:
        The created user, without password hash

    Raises:
        DuplicateEmail: If the email is already registered
        StorageError: For any other persistence failure
    """
    user_id = core.user.create(
        email=data.email,
        password_hash=hash_password(data.password, rounds),
        name=data.name,
        created_by=created_by,
    )
    return row_to_user_response(core.user.get_by_id(user_id))


def get_user_by_id(core: Core, user_id: str) -> UserResponse | None:
    """Get a user by id, or None."""
    row = core.user.get_by_id(user_id)
    return row_to_user_response(row) if row else None


def get_user_by_email(core: Core, email: str) -> UserResponse | None:
    """Get a user by email, or None. The hash is dropped."""
    row = core.user.get_by_email(email)
    return row_to_user_response(row) if row else None


def list_users(core: Core, created_by: str | None = None) -> list[UserResponse]:
    """List users most-recent-first, optionally for a single creator."""
    return [row_to_user_response(row) for row in core.user.list(created_by=created_by)]


def update_user(
    core: Core,
    user_id: str,
    data: UpdateUserRequest,
    created_by: str,
    rounds: int = DEFAULT_ROUNDS
) -> UserResponse:
    """Apply a partial update to a user owned by `created_by`.

    A new password is re-hashed before storage.

    Raises:
        NotFoundOrForbidden: If no record with this id AND this creator exists
        DuplicateEmail: If the new email belongs to another record
    """
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    password = changes.pop("password", None)
    if password is not None:
        changes["password_hash"] = hash_password(password, rounds)

    if not core.user.update(user_id, created_by, changes):
        raise NotFoundOrForbidden(
            "User not found or you do not have permission to update this user",
            {"user_id": user_id}
        )

    return row_to_user_response(core.user.get_by_id(user_id))


def delete_user(core: Core, user_id: str, created_by: str) -> None:
    """Delete a user owned by `created_by`.

    Raises:
        NotFoundOrForbidden: If no record with this id AND this creator exists
    """
    if not core.user.delete(user_id, created_by):
        raise NotFoundOrForbidden(
            "User not found or you do not have permission to delete this user",
            {"user_id": user_id}
        )


# ============================================================================
# Credential Verification
# ============================================================================


def validate_credentials(core: Core, email: str, password: str) -> UserResponse | None:
    """
    Check an email/password pair.

    No hash comparison is attempted when the email is unknown.

    Args:
        core: Core instance
        email: Email address (case-insensitive)
        password: Plain text password

    Returns:
        The sanitized user on match, None otherwise
    """
    row = core.user.get_by_email(email)
    if row is None:
        return None

    if not verify_password(password, row["password_hash"]):
        return None

    return row_to_user_response(row)
