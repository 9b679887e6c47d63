"""Catalog application service.

Orchestrates repository calls, running multi-step operations inside one
transaction and translating storage errors into domain errors.
"""

from watch_server.database import Repository
from watch_server.services.catalog.episodes import EpisodeOperations
from watch_server.services.catalog.movies import MovieOperations
from watch_server.services.catalog.series import SeriesOperations
from watch_server.services.catalog.users import UserOperations
from watch_server.services.hasher import PasswordHasher
from watch_server.services.token import TokenService


class Application(UserOperations, MovieOperations, SeriesOperations, EpisodeOperations):
    """Entry point for every catalog operation.

    Attributes:
        _repository: Transaction-capable repository.
        _token_service: Token issuer and validator.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        repository: Repository,
        token_service: TokenService,
        hasher: PasswordHasher,
    ) -> None:
        """Initialize application with its collaborators.

        Args:
            repository: Storage facade.
            token_service: JWT service.
            hasher: Password hasher.
        """
        self._repository = repository
        self._token_service = token_service
        self._hasher = hasher
