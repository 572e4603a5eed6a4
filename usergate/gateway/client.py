"""Client for the authentication service.

Sends messages over HTTP with httpx and turns error responses back into
the exception classes the service raised, so errors reach the gateway's
error handlers unchanged. Nothing here retries.
"""

import logging
from typing import Any

import httpx

from ..auth.schemas import (
    CreateUserRequest,
    LoginRequest,
    RegisterRequest,
    UpdateUserRequest,
    UserResponse,
)
from ..config import Settings
from ..exceptions import ERROR_TYPES, ServiceUnavailable, UserGateError
from ..service import patterns

logger = logging.getLogger(__name__)


def _user(data: dict | None) -> UserResponse | None:
    return UserResponse.model_validate(data) if data is not None else None


class AuthServiceClient:
    """Unary request/response calls to the authentication service."""

    def __init__(self, http: httpx.Client, timeout: float = 10.0, health_timeout: float = 5.0):
        self._http = http
        self._timeout = timeout
        self._health_timeout = health_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthServiceClient":
        http = httpx.Client(base_url=settings.auth_service_url)
        return cls(http, settings.service_timeout, settings.health_check_timeout)

    def send(self, pattern: str, data: dict | None = None, timeout: float | None = None) -> Any:
        """
        Send one message and return the `data` of the reply.

        Raises:
            ServiceUnavailable: If the service cannot be reached or times out
            UserGateError: The subclass the service raised, rebuilt from the reply
        """
        try:
            response = self._http.post(
                f"/messages/{pattern}",
                json=data or {},
                timeout=timeout or self._timeout,
            )
        except httpx.TransportError as e:
            logger.error(f"Authentication service unreachable ({pattern}): {e}")
            raise ServiceUnavailable("Authentication service unavailable") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ServiceUnavailable(
                "Authentication service returned an invalid response",
                {"status": response.status_code}
            ) from e

        if response.is_error:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            error_cls = ERROR_TYPES.get(error.get("type"), UserGateError)
            raise error_cls(error.get("message", "Authentication service error"), error.get("details"))

        return body.get("data")

    # ========================================================================
    # Typed wrappers, one per message pattern
    # ========================================================================

    def register(self, data: RegisterRequest) -> UserResponse:
        return _user(self.send(patterns.USER_REGISTER, data.model_dump()))

    def create_user(self, data: CreateUserRequest, creator_id: str) -> UserResponse:
        return _user(self.send(patterns.USER_CREATE, {
            "user": data.model_dump(),
            "creatorId": creator_id,
        }))

    def find_all(self) -> list[UserResponse]:
        return [_user(item) for item in self.send(patterns.USER_FIND_ALL)]

    def find_by_creator(self, creator_id: str) -> list[UserResponse]:
        return [_user(item) for item in self.send(patterns.USER_FIND_BY_CREATOR, {"creatorId": creator_id})]

    def find_by_id(self, user_id: str) -> UserResponse | None:
        return _user(self.send(patterns.USER_FIND_BY_ID, {"userId": user_id}))

    def find_by_email(self, email: str) -> UserResponse | None:
        return _user(self.send(patterns.USER_FIND_BY_EMAIL, {"email": email}))

    def update_user(self, user_id: str, data: UpdateUserRequest, creator_id: str) -> UserResponse:
        return _user(self.send(patterns.USER_UPDATE, {
            "userId": user_id,
            "update": data.model_dump(exclude_unset=True),
            "creatorId": creator_id,
        }))

    def delete_user(self, user_id: str, creator_id: str) -> None:
        self.send(patterns.USER_DELETE, {"userId": user_id, "creatorId": creator_id})

    def validate_user(self, credentials: LoginRequest) -> UserResponse | None:
        return _user(self.send(patterns.USER_VALIDATE, credentials.model_dump()))

    def health_check(self) -> dict:
        """Ping the service with the short health timeout."""
        return self.send(patterns.HEALTH_CHECK, timeout=self._health_timeout)

    def close(self) -> None:
        self._http.close()
