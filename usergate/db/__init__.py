"""Database module for usergate.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
user store operations.

ARCHITECTURE:
- Database is an explicitly constructed object holding the database path;
  it is passed to whatever needs storage (no process-wide connection)
- Core owns its connection
- Connection closes on context exit (atomic=True) or when Core is released

    db = Database(settings.database_path)
    db.init()

    # Autocommit read
    core = db.get_core()
    row = core.user.get_by_id(user_id)

    # Atomic write
    with db.get_core(atomic=True) as core:
        core.user.create(email, password_hash, name, created_by=None)
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .user import UserOperations

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


class Core:
    """
    Database Core with user operations.

    Maintains its own connection and transaction state.

    Connection Lifecycle:
    - atomic=True: Connection commits or rolls back and closes on __exit__
    - atomic=False: Connection closes when the Core is garbage collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User store operations, created on first access."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def __enter__(self) -> "Core":
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                # Connection may already be closed
                pass


class Database:
    """Connection factory for the user store."""

    def __init__(self, path: str):
        self.path = path

    def connect(self) -> sqlite3.Connection:
        """Create a fresh connection with Row factory."""
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def get_core(self, atomic: bool = False) -> Core:
        """
        Get a database Core instance.

        Args:
            atomic: If True, returns a Core that MUST be used as context manager
                    so that all operations commit together on exit.

        Returns:
            Core instance with user operations
        """
        return Core(self.connect(), atomic=atomic)

    def init(self) -> None:
        """Apply schema.sql. Safe to call on an existing database."""
        conn = self.connect()
        try:
            conn.executescript(SCHEMA_PATH.read_text())
            conn.commit()
        finally:
            conn.close()

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            conn = self.connect()
        except (sqlite3.Error, OSError):
            return False
        try:
            conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error:
            return False
        finally:
            conn.close()


__all__ = ["Core", "Database"]
