"""Authentication module for usergate.

- Schema validation for auth operations
- Password hashing and credential verification
- JWT token issuance and validation
- Bearer token middleware for protected gateway endpoints
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
