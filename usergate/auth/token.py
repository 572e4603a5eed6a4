"""JWT token issuance and verification.

Tokens carry exactly the user's id (`sub`) and email plus the standard
`iat`/`exp` claims, signed with the server-held secret. There is no
revocation list: expiry is the only way a token stops being valid.
"""

import logging
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..exceptions import InvalidToken
from ..utils import isodatetime
from .schemas import TokenPayload, UserResponse

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]


class TokenIssuer:
    """Mints and verifies signed, time-bound access tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expiry: timedelta = timedelta(hours=24)):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expiry = expiry

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expiry=timedelta(hours=settings.jwt_expiry_hours),
        )

    def generate_access_token(self, user: UserResponse) -> str:
        """
        Issue a token for a user.

        Args:
            user: User the token is issued to

        Returns:
            Encoded JWT string
        """
        payload = {
            "sub": user.id,
            "email": user.email,
            "iat": isodatetime.now_unix(),
            "exp": isodatetime.unix_after(self._expiry),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate_access_token(self, token: str) -> TokenPayload:
        """
        Verify a token's signature and expiry and decode its claims.

        Raises:
            InvalidToken: If the token is malformed, wrongly signed,
                          expired, or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken("Token has expired", {"code": "token_expired"}) from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidToken("Invalid token", {"code": "invalid_token"}) from e

        try:
            return TokenPayload(**payload)
        except PydanticValidationError as e:
            raise InvalidToken("Invalid token", {"code": "invalid_claims"}) from e

