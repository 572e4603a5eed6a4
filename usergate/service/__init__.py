"""Authentication service.

Owns the user store. Reachable only by the gateway, through the message
endpoint in service/api.py.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..config import Settings
from ..db import Database
from ..exceptions import UserGateError
from ..users import UsersService

logger = logging.getLogger(__name__)


def _error_body(error_type: str, message: str, details: dict | None = None) -> dict:
    body = {"error": {"type": error_type, "message": message}}
    if details:
        body["error"]["details"] = details
    return body


def handle_usergate_error(error: UserGateError):
    """Serialize a UserGateError so the gateway can rebuild it."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message}", exc_info=error)
    return jsonify(_error_body(error.__class__.__name__, error.message, error.details)), error.status_code


def handle_http_error(error: HTTPException):
    return jsonify(_error_body(error.name.replace(" ", ""), error.description)), error.code


def handle_internal_error(error: Exception):
    """Handle unexpected errors without leaking internals."""
    logger.exception(f"Internal error: {error}")
    return jsonify(_error_body("StorageError", "An internal error occurred")), 500


def create_service_app(settings: Settings, database: Database | None = None) -> Flask:
    """
    Build the authentication service app.

    Args:
        settings: Application settings
        database: Optional Database; defaults to settings.database_path

    Returns:
        Flask app with the message endpoint registered and schema applied
    """
    from .api import messages_bp

    app = Flask(__name__)

    database = database or Database(settings.database_path)
    try:
        database.init()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.extensions["database"] = database
    app.extensions["users_service"] = UsersService(database, settings.bcrypt_work_factor)

    app.register_error_handler(UserGateError, handle_usergate_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.register_blueprint(messages_bp)

    return app
