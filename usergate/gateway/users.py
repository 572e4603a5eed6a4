"""User management endpoints of the gateway.

Every route requires a bearer token. Listing, update and delete are
scoped to records the caller created:

- GET /users - Users created by the caller
- POST /users - Create a user owned by the caller
- GET /users/<user_id> - Fetch one user by id
- PUT /users/<user_id> - Partial update of an owned user
- DELETE /users/<user_id> - Delete an owned user (204)
"""

from flask import Blueprint, current_app, g, jsonify, request

from ..api.validation import validate_request
from ..auth.decorators import authenticate_request
from ..auth.schemas import CreateUserRequest, UpdateUserRequest
from ..exceptions import NotFoundOrForbidden
from .client import AuthServiceClient

users_bp = Blueprint("users", __name__)


@users_bp.before_request
def require_token():
    # CORS preflight carries no credentials
    if request.method == "OPTIONS":
        return None
    authenticate_request()


def _client() -> AuthServiceClient:
    return current_app.extensions["auth_client"]


@users_bp.get("")
def list_users():
    """List users the caller created, most recent first."""
    users = _client().find_by_creator(g.user_id)
    return jsonify([user.to_json() for user in users]), 200


@users_bp.post("")
@validate_request
def create_user(data: CreateUserRequest):
    """
    Create a user owned by the caller.

    The created record's createdBy is the caller's id. No token is issued.

    Raises:
        ValidationError: Invalid body (400)
        DuplicateEmail: Email already registered (409)
    """
    user = _client().create_user(data, g.user_id)
    return jsonify(user.to_json()), 201


@users_bp.get("/<user_id>")
def get_user(user_id: str):
    """
    Fetch a user by id.

    Raises:
        NotFoundOrForbidden: No user with this id (404)
    """
    user = _client().find_by_id(user_id)
    if user is None:
        raise NotFoundOrForbidden("User not found", {"user_id": user_id})
    return jsonify(user.to_json()), 200


@users_bp.put("/<user_id>")
@validate_request
def update_user(user_id: str, data: UpdateUserRequest):
    """
    Partially update a user the caller created.

    Raises:
        ValidationError: Invalid body (400)
        NotFoundOrForbidden: Missing or not owned by the caller (404)
        DuplicateEmail: New email already registered (409)
    """
    user = _client().update_user(user_id, data, g.user_id)
    return jsonify(user.to_json()), 200


@users_bp.delete("/<user_id>")
def delete_user(user_id: str):
    """
    Delete a user the caller created.

    Raises:
        NotFoundOrForbidden: Missing or not owned by the caller (404)
    """
    _client().delete_user(user_id, g.user_id)
    return "", 204
