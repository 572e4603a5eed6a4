"""Custom exceptions for usergate.

Every error that crosses a component boundary is a UserGateError subclass.
Each class carries the HTTP status and error code it maps to, so the
authentication service and the gateway translate them the same way.
"""


class UserGateError(Exception):
    """Base exception for all usergate errors."""

    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(UserGateError):
    """Malformed input, rejected before any store access."""

    status_code = 400
    error_code = "BAD_REQUEST"


class AuthorizationFailure(UserGateError):
    """Bad login credentials or a missing, invalid or expired token."""

    status_code = 401
    error_code = "UNAUTHORIZED"


class InvalidToken(AuthorizationFailure):
    """Token signature invalid, malformed, or expired."""


class NotFoundOrForbidden(UserGateError):
    """Record does not exist or is not owned by the caller.

    The two cases are deliberately indistinguishable.
    """

    status_code = 404
    error_code = "NOT_FOUND"


class DuplicateEmail(UserGateError):
    """Email uniqueness constraint violated."""

    status_code = 409
    error_code = "CONFLICT"


class StorageError(UserGateError):
    """Any other persistence failure."""

    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"


class ServiceUnavailable(UserGateError):
    """Authentication service could not be reached."""

    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"


# Lookup used to rebuild exceptions received over the service boundary
ERROR_TYPES: dict[str, type[UserGateError]] = {
    cls.__name__: cls
    for cls in (
        UserGateError,
        ValidationError,
        AuthorizationFailure,
        InvalidToken,
        NotFoundOrForbidden,
        DuplicateEmail,
        StorageError,
        ServiceUnavailable,
    )
}
