"""JWT token generation and validation service.

Issues short-lived access tokens and long-lived refresh tokens that
carry a user id, signed with the algorithm configured in settings
(HS512 by default).
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from watch_server.settings import settings

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes:
        user_id: Authenticated user id.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
    """

    user_id: int
    exp: datetime
    iat: datetime


class TokenError(Exception):
    """Base exception for token operations."""

    pass


class InvalidTokenError(TokenError):
    """Raised when token is malformed, tampered with or invalid."""

    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when token has expired."""

    pass


# =============================================================================
# TOKEN SERVICE
# =============================================================================


class TokenService:
    """Service for JWT token operations.

    Attributes:
        _secret_key: Secret key for signing.
        _algorithm: JWT algorithm.
        _access_expire: Access token lifetime.
        _refresh_expire: Refresh token lifetime.
    """

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str | None = None,
        access_expire_minutes: int | None = None,
        refresh_expire_minutes: int | None = None,
    ) -> None:
        """Initialize token service, falling back to settings.

        Args:
            secret_key: Signing key.
            algorithm: JWT algorithm.
            access_expire_minutes: Access token lifetime in minutes.
            refresh_expire_minutes: Refresh token lifetime in minutes.
        """
        security = settings.security
        self._secret_key = secret_key or security.jwt_secret_key
        self._algorithm = algorithm or security.jwt_algorithm
        self._access_expire = timedelta(
            minutes=access_expire_minutes
            if access_expire_minutes is not None
            else security.jwt_access_expire_minutes
        )
        self._refresh_expire = timedelta(
            minutes=refresh_expire_minutes
            if refresh_expire_minutes is not None
            else security.jwt_refresh_expire_minutes
        )

    def create_access_token(self, user_id: int) -> str:
        """Generate a new access token.

        Args:
            user_id: Token subject.

        Returns:
            Encoded JWT string.
        """
        return self._create_token(user_id, self._access_expire)

    def create_refresh_token(self, user_id: int) -> str:
        """Generate a new refresh token.

        Args:
            user_id: Token subject.

        Returns:
            Encoded JWT string.
        """
        return self._create_token(user_id, self._refresh_expire)

    def _create_token(self, user_id: int, lifetime: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate(self, token: str) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: Encoded JWT string.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If token has expired.
            InvalidTokenError: If token is malformed or its signature is wrong.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except PyJWTError as e:
            raise InvalidTokenError("Invalid token") from e
        return self._parse_payload(payload)

    @staticmethod
    def _parse_payload(payload: dict[str, Any]) -> TokenPayload:
        """Parse raw payload dict into TokenPayload.

        Raises:
            InvalidTokenError: If the subject is not a user id.
        """
        try:
            user_id = int(payload["sub"])
        except ValueError as e:
            raise InvalidTokenError("Invalid token subject") from e
        return TokenPayload(
            user_id=user_id,
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
        )


def get_token_service() -> TokenService:
    """Factory function for TokenService.

    Returns:
        Configured TokenService instance.
    """
    return TokenService()
