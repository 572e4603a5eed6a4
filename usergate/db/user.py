"""User store operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

OWNERSHIP:
update() and delete() take the acting creator id and put it in the WHERE
clause next to the record id. A record whose created_by is NULL
(self-registered) never matches, so it cannot be managed through this path.

PASSWORD HASHES:
Only get_by_email() selects password_hash. Every other read selects
PUBLIC_COLUMNS.
"""

import sqlite3
from typing import Any

from . import query
from ..exceptions import DuplicateEmail, StorageError
from ..utils import isodatetime, uid

PUBLIC_COLUMNS = "id, email, name, created_by, created_at, updated_at"

# Columns update() never touches
IMMUTABLE_COLUMNS = {"id", "created_by", "created_at", "updated_at"}


def _is_email_conflict(error: sqlite3.IntegrityError) -> bool:
    return "users.email" in str(error)


class UserOperations:
    """User record persistence."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(
        self,
        email: str,
        password_hash: str,
        name: str,
        created_by: str | None = None
    ) -> str:
        """Insert a user record with an auto-generated UUID.

        Args:
            email: Email address; stored lowercase
            password_hash: Salted bcrypt hash
            name: Display name
            created_by: Creator's user id, or None for self-registration

        Returns:
            The new user id

        Raises:
            DuplicateEmail: If the email is already registered
            StorageError: For any other persistence failure
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        try:
            self._conn.execute(
                """INSERT INTO users (id, email, password_hash, name, created_by, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (user_id, email.lower(), password_hash, name, created_by, now, now)
            )
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                raise DuplicateEmail("Email already exists", {"email": email.lower()}) from e
            raise StorageError("Failed to create user") from e
        except sqlite3.Error as e:
            raise StorageError("Failed to create user") from e

        return user_id

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get a user by id, without the password hash."""
        return self._fetch_one(
            f"SELECT {PUBLIC_COLUMNS} FROM users WHERE id = ?",
            (user_id,)
        )

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get a user by email INCLUDING the password hash.

        For credential verification only; never return this row outward.
        """
        return self._fetch_one(
            "SELECT * FROM users WHERE email = ?",
            (email.lower(),)
        )

    def list(self, created_by: str | None = None) -> list[sqlite3.Row]:
        """List users most-recent-first, optionally only those made by one creator.

        Args:
            created_by: If given, only records with this creator are returned

        Returns:
            List of rows without password hashes
        """
        where_clause, params = query.build_where_clause({"created_by": created_by})

        try:
            return self._conn.execute(
                f"""SELECT {PUBLIC_COLUMNS} FROM users
                    WHERE {where_clause}
                    ORDER BY created_at DESC, rowid DESC""",
                params
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageError("Failed to list users") from e

    def update(self, user_id: str, created_by: str, data: dict[str, Any]) -> bool:
        """Update a record owned by `created_by`.

        Args:
            user_id: Id of the record to update
            created_by: Acting user's id; must equal the record's creator
            data: Column name to new value. None values and immutable
                  columns are ignored. Passwords must already be hashed.

        Returns:
            True if an owned record matched, False otherwise

        Raises:
            DuplicateEmail: If the new email belongs to another record
            StorageError: For any other persistence failure
        """
        if data.get("email") is not None:
            data = {**data, "email": data["email"].lower()}

        update_clause, params = query.build_update_clause(data, exclude=IMMUTABLE_COLUMNS)

        if not update_clause:
            return self._fetch_one(
                "SELECT id FROM users WHERE id = ? AND created_by = ?",
                (user_id, created_by)
            ) is not None

        params.extend([isodatetime.now(), user_id, created_by])

        try:
            cursor = self._conn.execute(
                f"UPDATE users SET {update_clause}, updated_at = ? WHERE id = ? AND created_by = ?",
                params
            )
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                raise DuplicateEmail("Email already exists", {"email": data.get("email")}) from e
            raise StorageError("Failed to update user") from e
        except sqlite3.Error as e:
            raise StorageError("Failed to update user") from e

        return cursor.rowcount > 0

    def delete(self, user_id: str, created_by: str) -> bool:
        """Delete a record owned by `created_by`.

        Returns:
            True if an owned record was deleted, False otherwise
        """
        try:
            cursor = self._conn.execute(
                "DELETE FROM users WHERE id = ? AND created_by = ?",
                (user_id, created_by)
            )
        except sqlite3.Error as e:
            raise StorageError("Failed to delete user") from e

        return cursor.rowcount > 0

    def _fetch_one(self, sql: str, params: tuple) -> sqlite3.Row | None:
        try:
            return self._conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise StorageError("Failed to read user") from e
