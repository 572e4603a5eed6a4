"""Ownership-scoped user management."""

from .service import UsersService

__all__ = ["UsersService"]
