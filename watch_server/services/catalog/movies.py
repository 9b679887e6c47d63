"""Movie operations."""

from watch_server.database import Movie, Repository
from watch_server.database.models import FilmsAudit
from watch_server.services.catalog.errors import not_found_on_no_record
from watch_server.services.catalog.requests import (
    InvalidationRequest,
    MovieCreateRequest,
    MovieUpdateRequest,
)


class MovieOperations:
    """Movie catalog operations."""

    _repository: Repository

    def movie_get(self, movie_id: int) -> Movie:
        """Retrieve a movie.

        Raises:
            NotFoundError: If the movie does not exist.
        """
        with not_found_on_no_record():
            return self._repository.movie_get(movie_id)

    def movies_get_all(self, offset: int, limit: int) -> tuple[list[Movie], int]:
        """Retrieve a page of movies and the total count."""

        def page(tx: Repository) -> tuple[list[Movie], int]:
            return tx.movies_get_all(offset, limit), tx.movies_count()

        return self._repository.transaction(page)

    def movie_create(self, contributor_id: int, req: MovieCreateRequest) -> int:
        """Create a movie and return its id."""
        movie = Movie(
            title=req.title,
            descriptions=req.descriptions,
            date_released=req.date_released,
            duration=req.duration,
        )
        self._repository.movie_create(contributor_id, movie)
        return movie.id

    def movie_update(
        self,
        movie_id: int,
        contributor_id: int,
        req: MovieUpdateRequest,
    ) -> None:
        """Apply a sparse movie update.

        Raises:
            NotFoundError: If the movie does not exist.
        """
        with not_found_on_no_record():
            self._repository.movie_update(movie_id, contributor_id, req.to_columns())

    def movie_invalidate(
        self,
        movie_id: int,
        contributor_id: int,
        req: InvalidationRequest,
    ) -> None:
        """Soft-delete a movie.

        Raises:
            NotFoundError: If the movie does not exist.
        """
        with not_found_on_no_record():
            self._repository.movie_invalidate(movie_id, contributor_id, req.invalidation)

    def movie_audits_get_all(
        self,
        movie_id: int,
        offset: int,
        limit: int,
    ) -> tuple[list[FilmsAudit], int]:
        """Retrieve a page of movie history and its total count.

        Raises:
            NotFoundError: If the movie does not exist.
        """

        def page(tx: Repository) -> tuple[list[FilmsAudit], int]:
            with not_found_on_no_record():
                tx.movie_get(movie_id)
            return (
                tx.movie_audits_get_all(movie_id, offset, limit),
                tx.movie_audits_count(movie_id),
            )

        return self._repository.transaction(page)
