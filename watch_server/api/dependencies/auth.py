"""Authentication dependencies for FastAPI.

Provides dependency injection for JWT token validation
and current user extraction from request headers.
"""

from typing import Annotated

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from watch_server.api.errors import APIError
from watch_server.api.schemas import Status
from watch_server.services.token import (
    InvalidTokenError,
    TokenPayload,
    TokenService,
    get_token_service,
)

# =============================================================================
# SECURITY SCHEME
# =============================================================================

# Missing or malformed headers are reported by the dependencies below
security_scheme = HTTPBearer(
    scheme_name="JWT",
    description="Enter access token obtained from /v1/user/login",
    auto_error=False,
)


# =============================================================================
# DEPENDENCIES
# =============================================================================


def get_bearer_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security_scheme),
    ],
) -> str | None:
    """Extract the bearer token, None when missing or malformed.

    Args:
        credentials: Parsed Authorization header.

    Returns:
        Raw token string or None.
    """
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


def get_current_user(
    token: Annotated[str | None, Depends(get_bearer_token)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenPayload:
    """Extract and validate current user from the access token.

    Args:
        token: Bearer token from Authorization header.
        token_service: Token service for validation.

    Returns:
        Decoded token payload with the user id.

    Raises:
        APIError: 401 if token is missing, malformed, invalid or expired.
    """
    if token is None:
        raise APIError(
            status.HTTP_401_UNAUTHORIZED,
            Status.TOKEN_MISSING_OR_MALFORMED,
        )
    try:
        return token_service.validate(token)
    except InvalidTokenError:
        raise APIError(
            status.HTTP_401_UNAUTHORIZED,
            Status.TOKEN_INVALID,
        ) from None


# Type alias for cleaner endpoint signatures
CurrentUser = Annotated[TokenPayload, Depends(get_current_user)]
