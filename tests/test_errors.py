"""
Tests for the exception hierarchy.

Tests verify that:
- Every error carries a message and a details dict
- Each error kind maps to exactly one HTTP status and error code
- Every error class can be looked up by name across the service boundary
"""

import pytest

from usergate.exceptions import (
    ERROR_TYPES,
    AuthorizationFailure,
    DuplicateEmail,
    InvalidToken,
    NotFoundOrForbidden,
    ServiceUnavailable,
    StorageError,
    UserGateError,
    ValidationError,
)


class TestUserGateError:
    """Test the base exception."""

    def test_message_and_details(self):
        """Message and details should be stored and message used as str()."""
        error = UserGateError("Something failed", {"key": "value"})
        assert error.message == "Something failed"
        assert error.details == {"key": "value"}
        assert str(error) == "Something failed"

    def test_details_default_to_empty_dict(self):
        """Details should never be None."""
        assert UserGateError("x").details == {}


class TestStatusMapping:
    """Each error kind should map to one HTTP status and code."""

    @pytest.mark.parametrize("cls,status,code", [
        (ValidationError, 400, "BAD_REQUEST"),
        (AuthorizationFailure, 401, "UNAUTHORIZED"),
        (InvalidToken, 401, "UNAUTHORIZED"),
        (NotFoundOrForbidden, 404, "NOT_FOUND"),
        (DuplicateEmail, 409, "CONFLICT"),
        (StorageError, 500, "INTERNAL_SERVER_ERROR"),
        (ServiceUnavailable, 503, "SERVICE_UNAVAILABLE"),
    ])
    def test_status_and_code(self, cls, status, code):
        """Status code and error code should come from the class."""
        error = cls("message")
        assert error.status_code == status
        assert error.error_code == code
        assert isinstance(error, UserGateError)

    def test_invalid_token_is_authorization_failure(self):
        """Token errors should be handled wherever credential errors are."""
        with pytest.raises(AuthorizationFailure):
            raise InvalidToken("Token has expired")


class TestErrorTypes:
    """Test the lookup used across the service boundary."""

    def test_every_error_registered_by_name(self):
        """ERROR_TYPES should map each class name to its class."""
        for cls in (ValidationError, AuthorizationFailure, InvalidToken,
                    NotFoundOrForbidden, DuplicateEmail, StorageError, ServiceUnavailable):
            assert ERROR_TYPES[cls.__name__] is cls
