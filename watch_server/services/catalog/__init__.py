"""Catalog application: users, movies, series and episodes."""

from watch_server.services.catalog.application import Application
from watch_server.services.catalog.errors import (
    ApplicationError,
    EmailAlreadyUsedError,
    IncorrectPasswordError,
    NotFoundError,
    SameNewPasswordError,
    TokenInvalidError,
)

__all__ = [
    "Application",
    "ApplicationError",
    "NotFoundError",
    "EmailAlreadyUsedError",
    "IncorrectPasswordError",
    "TokenInvalidError",
    "SameNewPasswordError",
]
