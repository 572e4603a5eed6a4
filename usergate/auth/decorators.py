"""Bearer token authentication for gateway endpoints.

- @auth_required - Requires a valid JWT in `Authorization: Bearer <token>`
- authenticate_request() - same check, for blueprint before_request hooks

The token issuer is looked up on the running app
(`current_app.extensions["token_issuer"]`), registered by the gateway
app factory.
"""

import logging
from functools import wraps

from flask import current_app, g, request

from ..exceptions import AuthorizationFailure, InvalidToken
from .token import TokenIssuer

logger = logging.getLogger(__name__)


def _token_issuer() -> TokenIssuer:
    return current_app.extensions["token_issuer"]


def authenticate_request() -> None:
    """
    Validate the bearer token of the current request.

    Stores the token claims in flask.g:
    - g.user_id: Token subject (the acting user's id)
    - g.email: Token email

    Raises:
        AuthorizationFailure: If the header is missing or malformed
        InvalidToken: If the token is invalid or expired
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthorizationFailure(
            "Authentication required",
            {"expected": "Authorization: Bearer <token>"}
        )

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthorizationFailure(
            "Invalid authorization header format",
            {"expected": "Authorization: Bearer <token>"}
        )

    try:
        payload = _token_issuer().validate_access_token(parts[1])
    except InvalidToken as e:
        logger.warning(f"Rejected token on {request.path}: {e.message}")
        raise

    g.user_id = payload.sub
    g.email = payload.email


def auth_required(f):
    """
    Decorator to require a valid bearer token.

    Example:
    ```python
    @auth_bp.get("/users")
    @auth_required
    def list_all():
        creator_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
