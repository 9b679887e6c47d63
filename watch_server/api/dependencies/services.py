"""Service providers for FastAPI dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from watch_server.database import Repository, get_database
from watch_server.services.catalog import Application
from watch_server.services.hasher import get_password_hasher
from watch_server.services.token import get_token_service


@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """Get cached repository bound to the shared connection pool."""
    return Repository(get_database().session_factory)


@lru_cache(maxsize=1)
def get_application() -> Application:
    """Get cached catalog application.

    Returns:
        Application wired with repository, token service and hasher.
    """
    return Application(
        repository=get_repository(),
        token_service=get_token_service(),
        hasher=get_password_hasher(),
    )


# Type alias for cleaner endpoint signatures
App = Annotated[Application, Depends(get_application)]
