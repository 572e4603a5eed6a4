"""Gateway error envelope.

Every error response has the shape:

    {
        "statusCode": 409,
        "error": "CONFLICT",
        "message": "Email already exists",
        "timestamp": "2025-01-15T10:30:00.000000Z",
        "path": "/auth/register",
        "requestId": "5f1c..."
    }

Validation errors carry a list of messages, one per failing field.
"""

import logging

from flask import Flask, g, jsonify, request
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from ..exceptions import UserGateError, ValidationError
from ..utils import isodatetime

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    415: "UNSUPPORTED_MEDIA_TYPE",
    429: "RATE_LIMIT_EXCEEDED",
    500: "INTERNAL_SERVER_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def error_envelope(status_code: int, error: str, message: str | list[str]):
    body = {
        "statusCode": status_code,
        "error": error,
        "message": message,
        "timestamp": isodatetime.now(),
        "path": request.path,
    }
    request_id = g.get("request_id")
    if request_id:
        body["requestId"] = request_id
    return jsonify(body), status_code


def _validation_messages(error: ValidationError) -> str | list[str]:
    field_errors = error.details.get("errors") or []
    if not field_errors:
        return error.message
    return [f"{e['field']}: {e['message']}" for e in field_errors]


def handle_validation_error(error: ValidationError):
    return error_envelope(error.status_code, error.error_code, _validation_messages(error))


def handle_usergate_error(error: UserGateError):
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message}")
        message = error.message if error.status_code == 503 else "An internal error occurred"
    else:
        message = error.message
    return error_envelope(error.status_code, error.error_code, message)


def handle_rate_limit_exceeded(error: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {request.remote_addr} on {request.path}: {error.description}")
    return error_envelope(429, "RATE_LIMIT_EXCEEDED", "Too many requests, please try again later")


def handle_http_error(error: HTTPException):
    code = error.code or 500
    return error_envelope(code, HTTP_ERROR_CODES.get(code, "UNKNOWN_ERROR"), error.description)


def handle_internal_error(error: Exception):
    """Unexpected exceptions: log them, answer with a generic 500."""
    logger.exception(f"Internal error: {error}")
    return error_envelope(500, "INTERNAL_SERVER_ERROR", "An internal error occurred")


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(UserGateError, handle_usergate_error)
    app.register_error_handler(RateLimitExceeded, handle_rate_limit_exceeded)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)
