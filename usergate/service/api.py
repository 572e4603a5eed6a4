"""Message endpoint of the authentication service.

- POST /messages/<pattern> - Dispatch one message, respond {"data": result}

This is internal transport between the gateway and this service, not a
public API. Payloads are validated again here with the same schemas the
gateway uses; failures come back as ValidationError.
"""

import logging
from typing import Any, Callable

from flask import Blueprint, current_app, jsonify, request

from ..api.validation import validate
from ..auth.schemas import LoginRequest, RegisterRequest
from ..exceptions import NotFoundOrForbidden
from ..users import UsersService
from . import patterns
from .messages import (
    CreateUserMessage,
    CreatorMessage,
    DeleteUserMessage,
    EmailMessage,
    UpdateUserMessage,
    UserIdMessage,
)

logger = logging.getLogger(__name__)

messages_bp = Blueprint("messages", __name__)

Handler = Callable[[UsersService, dict], Any]
HANDLERS: dict[str, Handler] = {}


def handles(pattern: str):
    """Register a function as the handler for a message pattern."""
    def register(f: Handler) -> Handler:
        HANDLERS[pattern] = f
        return f
    return register


def _dump(user):
    return user.to_json() if user is not None else None


# ============================================================================
# Handlers
# ============================================================================


@handles(patterns.USER_REGISTER)
def register(users: UsersService, data: dict):
    return _dump(users.register(validate(RegisterRequest, data).unwrap()))


@handles(patterns.USER_CREATE)
def create(users: UsersService, data: dict):
    message = validate(CreateUserMessage, data).unwrap()
    return _dump(users.create_user(message.user, message.creator_id))


@handles(patterns.USER_FIND_ALL)
def find_all(users: UsersService, data: dict):
    return [_dump(user) for user in users.find_all()]


@handles(patterns.USER_FIND_BY_CREATOR)
def find_by_creator(users: UsersService, data: dict):
    message = validate(CreatorMessage, data).unwrap()
    return [_dump(user) for user in users.find_by_creator(message.creator_id)]


@handles(patterns.USER_FIND_BY_ID)
def find_by_id(users: UsersService, data: dict):
    message = validate(UserIdMessage, data).unwrap()
    return _dump(users.find_by_id(message.user_id))


@handles(patterns.USER_FIND_BY_EMAIL)
def find_by_email(users: UsersService, data: dict):
    message = validate(EmailMessage, data).unwrap()
    return _dump(users.find_by_email(message.email))


@handles(patterns.USER_UPDATE)
def update(users: UsersService, data: dict):
    message = validate(UpdateUserMessage, data).unwrap()
    return _dump(users.update_user(message.user_id, message.update, message.creator_id))


@handles(patterns.USER_DELETE)
def delete(users: UsersService, data: dict):
    message = validate(DeleteUserMessage, data).unwrap()
    users.delete_user(message.user_id, message.creator_id)
    return {"success": True}


@handles(patterns.USER_VALIDATE)
def validate_user(users: UsersService, data: dict):
    credentials = validate(LoginRequest, data).unwrap()
    return _dump(users.validate_user(credentials.email, credentials.password))


@handles(patterns.HEALTH_CHECK)
def health_check(users: UsersService, data: dict):
    database = current_app.extensions["database"]
    return {
        "status": "ok" if database.ping() else "degraded",
        "service": "authentication",
    }


# ============================================================================
# Dispatch
# ============================================================================


@messages_bp.post("/messages/<pattern>")
def dispatch(pattern: str):
    """
    Dispatch a message to its handler.

    Returns:
        200: {"data": <handler result>} (result may be null)
        400/401/404/409/500: {"error": {"type", "message", "details"?}}
    """
    handler = HANDLERS.get(pattern)
    if handler is None:
        raise NotFoundOrForbidden(f"Unknown message pattern '{pattern}'", {"pattern": pattern})

    data = request.get_json(silent=True)
    if data is None:
        data = {}

    logger.debug(f"Handling message {pattern}")
    result = handler(current_app.extensions["users_service"], data)

    return jsonify({"data": result}), 200
