"""Users service.

Wraps the credential store one operation at a time, adding a log line for
each call. Every value it returns is a UserResponse, so no password hash
leaves this layer. Ownership rules live in the store (see db/user.py);
this class adds none of its own.
"""

import logging

from ..auth import service as store
from ..auth.schemas import CreateUserRequest, RegisterRequest, UpdateUserRequest, UserResponse
from ..db import Database

logger = logging.getLogger(__name__)


class UsersService:
    """User operations for the authentication service."""

    def __init__(self, database: Database, bcrypt_rounds: int = store.DEFAULT_ROUNDS):
        self._db = database
        self._rounds = bcrypt_rounds

    def register(self, data: RegisterRequest) -> UserResponse:
        """Self-registration: the new record has no creator."""
        logger.info(f"Registering new user: {data.email}")

        with self._db.get_core(atomic=True) as core:
            user = store.create_user(core, data, created_by=None, rounds=self._rounds)

        logger.info(f"User registered successfully: {user.id}")
        return user

    def create_user(self, data: CreateUserRequest, creator_id: str) -> UserResponse:
        """Create a user owned by `creator_id`."""
        logger.info(f"Creating new user: {data.email} (creator {creator_id})")

        with self._db.get_core(atomic=True) as core:
            user = store.create_user(core, data, created_by=creator_id, rounds=self._rounds)

        logger.info(f"User created successfully: {user.id} (creator {creator_id})")
        return user

    def find_all(self) -> list[UserResponse]:
        logger.info("Fetching all users")
        return store.list_users(self._db.get_core())

    def find_by_creator(self, creator_id: str) -> list[UserResponse]:
        logger.info(f"Fetching users by creator: {creator_id}")
        return store.list_users(self._db.get_core(), created_by=creator_id)

    def find_by_id(self, user_id: str) -> UserResponse | None:
        return store.get_user_by_id(self._db.get_core(), user_id)

    def find_by_email(self, email: str) -> UserResponse | None:
        return store.get_user_by_email(self._db.get_core(), email)

    def update_user(self, user_id: str, data: UpdateUserRequest, creator_id: str) -> UserResponse:
        """Update a user; only its creator may do so."""
        logger.info(f"Updating user: {user_id} (creator {creator_id})")

        with self._db.get_core(atomic=True) as core:
            user = store.update_user(core, user_id, data, creator_id, rounds=self._rounds)

        logger.info(f"User updated successfully: {user.id}")
        return user

    def delete_user(self, user_id: str, creator_id: str) -> None:
        """Delete a user; only its creator may do so."""
        logger.info(f"Deleting user: {user_id} (creator {creator_id})")

        with self._db.get_core(atomic=True) as core:
            store.delete_user(core, user_id, creator_id)

        logger.info(f"User deleted successfully: {user_id}")

    def validate_user(self, email: str, password: str) -> UserResponse | None:
        """Check login credentials."""
        logger.info(f"Validating user credentials: {email}")
        return store.validate_credentials(self._db.get_core(), email, password)
