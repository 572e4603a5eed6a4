"""Authentication endpoints of the gateway.

- POST /auth/register - Self-registration, returns user and access token
- POST /auth/login - Credential login, returns user and access token
- GET /auth/users - List every user (authenticated)
- GET /auth/me - Profile of the token holder (authenticated)
- POST /auth/logout - Acknowledge logout (authenticated, stateless)

Login failures use one message for unknown emails and wrong passwords.
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from ..api.validation import validate_request
from ..auth.decorators import auth_required
from ..auth.schemas import AuthResponse, LoginRequest, RegisterRequest
from ..auth.token import TokenIssuer
from ..exceptions import AuthorizationFailure, NotFoundOrForbidden
from .client import AuthServiceClient

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _client() -> AuthServiceClient:
    return current_app.extensions["auth_client"]


def _issuer() -> TokenIssuer:
    return current_app.extensions["token_issuer"]


@auth_bp.post("/register")
@validate_request
def register(data: RegisterRequest):
    """
    Register a new account.

    Example request:
    ```json
    {
        "email": "user@example.com",
        "password": "Password123",
        "name": "John Doe"
    }
    ```

    Example response (201):
    ```json
    {
        "user": {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "user@example.com",
            "name": "John Doe",
            "createdBy": null,
            "createdAt": "2025-01-15T10:30:00.000000Z",
            "updatedAt": "2025-01-15T10:30:00.000000Z"
        },
        "accessToken": "eyJhbGciOiJIUzI1NiIs..."
    }
    ```

    Raises:
        ValidationError: Invalid body (400)
        DuplicateEmail: Email already registered (409)
    """
    user = _client().register(data)
    token = _issuer().generate_access_token(user)

    logger.info(f"User registered: {user.id}")
    return jsonify(AuthResponse(user=user, access_token=token).to_json()), 201


@auth_bp.post("/login")
@validate_request
def login(data: LoginRequest):
    """
    Exchange credentials for an access token.

    Raises:
        ValidationError: Invalid body (400)
        AuthorizationFailure: Unknown email or wrong password (401)
    """
    user = _client().validate_user(data)
    if user is None:
        logger.warning(f"Failed login attempt for {data.email}")
        raise AuthorizationFailure(INVALID_CREDENTIALS)

    token = _issuer().generate_access_token(user)

    logger.info(f"User logged in: {user.id}")
    return jsonify(AuthResponse(user=user, access_token=token).to_json()), 200


@auth_bp.get("/users")
@auth_required
def list_users():
    """List every user in the system, most recent first."""
    users = _client().find_all()
    return jsonify([user.to_json() for user in users]), 200


@auth_bp.get("/me")
@auth_required
def me():
    """Return the profile of the token holder."""
    user = _client().find_by_id(g.user_id)
    if user is None:
        # Token is valid but the account has since been deleted
        raise NotFoundOrForbidden("User not found", {"user_id": g.user_id})
    return jsonify(user.to_json()), 200


@auth_bp.post("/logout")
@auth_required
def logout():
    """
    Logout.

    Tokens are stateless; the client discards its token. Nothing is
    revoked server-side.
    """
    logger.info(f"User logged out: {g.user_id}")
    return jsonify({"message": "Logged out successfully"}), 200
