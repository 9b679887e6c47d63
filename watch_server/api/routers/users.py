"""User endpoints: registration, login, token refresh and account management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from watch_server.api.dependencies.auth import CurrentUser, get_bearer_token
from watch_server.api.dependencies.rate_limit import check_rate_limit
from watch_server.api.dependencies.services import App
from watch_server.api.errors import APIError
from watch_server.api.schemas import MAX_INT64, ResponseValue, Status, TokenPair, UserResponse, ok
from watch_server.services.catalog import NotFoundError
from watch_server.services.catalog.requests import (
    UserCreateRequest,
    UserDeleteRequest,
    UserEmailUpdateRequest,
    UserLoginRequest,
    UserPasswordUpdateRequest,
    UserUpdateRequest,
)

public_router = APIRouter(
    prefix="/user",
    tags=["Users"],
    dependencies=[Depends(check_rate_limit)],
)

router = APIRouter(
    prefix="/authorized/user",
    tags=["Users"],
    dependencies=[Depends(check_rate_limit)],
)


# =============================================================================
# PUBLIC ENDPOINTS
# =============================================================================


@public_router.post(
    "",
    response_model=ResponseValue[int],
    summary="Register",
    description="Create a user account and return its id.",
)
def create_user(request: UserCreateRequest, app: App) -> ResponseValue[int]:
    """Register a new user.

    Raises:
        EmailAlreadyUsedError: 400 if the email is taken.
    """
    return ok(app.user_create(request))


@public_router.post(
    "/login",
    response_model=ResponseValue[TokenPair],
    summary="Login",
    description="Exchange email and password for access and refresh tokens.",
)
def login(request: UserLoginRequest, app: App) -> ResponseValue[TokenPair]:
    """Authenticate and issue tokens.

    Raises:
        APIError: 400 EmailNotFound if no user has this email.
        IncorrectPasswordError: 400 if the password does not match.
    """
    try:
        access_token, refresh_token = app.user_login(request)
    except NotFoundError:
        raise APIError(status.HTTP_400_BAD_REQUEST, Status.EMAIL_NOT_FOUND) from None
    return ok(TokenPair(access_token=access_token, refresh_token=refresh_token))


@public_router.get(
    "/refresh",
    response_model=ResponseValue[str],
    summary="Refresh access token",
    description="Exchange the refresh token in the Authorization header for a new access token.",
)
def refresh_token(
    token: Annotated[str | None, Depends(get_bearer_token)],
    app: App,
) -> ResponseValue[str]:
    """Issue a new access token.

    Raises:
        APIError: 400 if the token is missing or malformed.
        TokenInvalidError: 400 if the token fails validation.
    """
    if token is None:
        raise APIError(status.HTTP_400_BAD_REQUEST, Status.TOKEN_MISSING_OR_MALFORMED)
    return ok(app.user_refresh_token(token))


# =============================================================================
# AUTHORIZED ENDPOINTS
# =============================================================================


@router.get(
    "/{user_id}",
    response_model=ResponseValue[UserResponse],
    summary="Get user",
)
def get_user(
    user_id: Annotated[int, Path(ge=1, le=MAX_INT64)],
    _user: CurrentUser,
    app: App,
) -> ResponseValue[UserResponse]:
    """Get a user's public profile."""
    return ok(UserResponse.model_validate(app.user_get(user_id)))


@router.patch(
    "",
    response_model=ResponseValue[None],
    summary="Update profile",
    description="Change only the submitted profile fields of the current user.",
)
def update_user(
    request: UserUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Apply a sparse profile update to the current user."""
    app.user_update(user.user_id, request)
    return ok()


@router.put(
    "/email",
    response_model=ResponseValue[None],
    summary="Change email",
)
def update_email(
    request: UserEmailUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Change the current user's email."""
    app.user_email_update(user.user_id, request)
    return ok()


@router.put(
    "/password",
    response_model=ResponseValue[None],
    summary="Change password",
)
def update_password(
    request: UserPasswordUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Change the current user's password."""
    app.user_password_update(user.user_id, request)
    return ok()


@router.delete(
    "",
    response_model=ResponseValue[None],
    summary="Delete account",
)
def delete_user(
    request: UserDeleteRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Delete the current user after password confirmation."""
    app.user_delete(user.user_id, request)
    return ok()
