"""Transaction-scoped repository facade.

Repository exposes every storage operation as a flat method. Outside a
transaction each call runs in its own short session. transaction(fn)
opens one session, hands fn a SessionRepository bound to it, and owns
the commit or rollback. Nested transaction() calls on a SessionRepository
reuse the open session.

Example:
    ```python
    repo = Repository(get_database().session_factory)

    def register(tx: Repository) -> int:
        user = User(email="a@b.com", hashed_password=digest)
        tx.user_create(user)
        return user.id

    user_id = repo.transaction(register)
    ```
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.orm import Session, sessionmaker

from watch_server.database.entities import Episode, Movie
from watch_server.database.models import FilmsAudit, Series, SeriesesAudit, User
from watch_server.database.repositories import (
    Columns,
    EpisodeRepository,
    MovieRepository,
    SeriesRepository,
    UserRepository,
)

T = TypeVar("T")


class Repository:
    """Storage operations backed by a session factory."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize with a session factory.

        Args:
            session_factory: Factory producing new sessions.
        """
        self._session_factory = session_factory

    @contextmanager
    def _session_scope(self) -> Generator[Session, None, None]:
        """Run a unit of work in a new session.

        Commits on success. Rolls back on any exception, including
        KeyboardInterrupt and SystemExit, before re-raising.

        Yields:
            SQLAlchemy Session instance.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    def transaction(self, fn: Callable[["Repository"], T]) -> T:
        """Run fn atomically.

        Args:
            fn: Callback receiving a repository bound to the transaction.

        Returns:
            Whatever fn returns, after commit.
        """
        with self._session_scope() as session:
            return fn(SessionRepository(session))

    # =========================================================================
    # USERS
    # =========================================================================

    def user_get(self, user_id: int) -> User:
        with self._session_scope() as session:
            return UserRepository(session).get(user_id)

    def user_get_by_email(self, email: str) -> User:
        with self._session_scope() as session:
            return UserRepository(session).get_by_email(email)

    def users_count(self) -> int:
        with self._session_scope() as session:
            return UserRepository(session).count()

    def user_create(self, user: User) -> None:
        with self._session_scope() as session:
            UserRepository(session).create(user)

    def user_update(self, user_id: int, columns: Columns) -> None:
        with self._session_scope() as session:
            UserRepository(session).update(user_id, columns)

    def user_delete(self, user_id: int) -> None:
        with self._session_scope() as session:
            UserRepository(session).delete(user_id)

    # =========================================================================
    # SERIESES
    # =========================================================================

    def series_get(self, series_id: int) -> Series:
        with self._session_scope() as session:
            return SeriesRepository(session).get(series_id)

    def serieses_get_all(self, offset: int, limit: int) -> list[Series]:
        with self._session_scope() as session:
            return SeriesRepository(session).get_all(offset, limit)

    def serieses_count(self) -> int:
        with self._session_scope() as session:
            return SeriesRepository(session).count()

    def series_create(self, contributor_id: int, series: Series) -> None:
        with self._session_scope() as session:
            SeriesRepository(session).create(contributor_id, series)

    def series_update(self, series_id: int, contributor_id: int, columns: Columns) -> None:
        with self._session_scope() as session:
            SeriesRepository(session).update(series_id, contributor_id, columns)

    def series_invalidate(self, series_id: int, contributor_id: int, invalidation: str) -> None:
        with self._session_scope() as session:
            SeriesRepository(session).invalidate(series_id, contributor_id, invalidation)

    def series_audits_get_all(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> list[SeriesesAudit]:
        with self._session_scope() as session:
            return SeriesRepository(session).audits_get_all(series_id, offset, limit)

    def series_audits_count(self, series_id: int) -> int:
        with self._session_scope() as session:
            return SeriesRepository(session).audits_count(series_id)

    # =========================================================================
    # MOVIES
    # =========================================================================

    def movie_get(self, movie_id: int) -> Movie:
        with self._session_scope() as session:
            return MovieRepository(session).get(movie_id)

    def movies_get_all(self, offset: int, limit: int) -> list[Movie]:
        with self._session_scope() as session:
            return MovieRepository(session).get_all(offset, limit)

    def movies_count(self) -> int:
        with self._session_scope() as session:
            return MovieRepository(session).count()

    def movie_create(self, contributor_id: int, movie: Movie) -> None:
        with self._session_scope() as session:
            MovieRepository(session).create(contributor_id, movie)

    def movie_update(self, movie_id: int, contributor_id: int, columns: Columns) -> None:
        with self._session_scope() as session:
            MovieRepository(session).update(movie_id, contributor_id, columns)

    def movie_invalidate(self, movie_id: int, contributor_id: int, invalidation: str) -> None:
        with self._session_scope() as session:
            MovieRepository(session).invalidate(movie_id, contributor_id, invalidation)

    def movie_audits_get_all(self, movie_id: int, offset: int, limit: int) -> list[FilmsAudit]:
        with self._session_scope() as session:
            return MovieRepository(session).audits_get_all(movie_id, offset, limit)

    def movie_audits_count(self, movie_id: int) -> int:
        with self._session_scope() as session:
            return MovieRepository(session).audits_count(movie_id)

    # =========================================================================
    # EPISODES
    # =========================================================================

    def episode_get(self, series_id: int, season: int, episode: int) -> Episode:
        with self._session_scope() as session:
            return EpisodeRepository(session).get(series_id, season, episode)

    def episodes_get_all_by_series(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> list[Episode]:
        with self._session_scope() as session:
            return EpisodeRepository(session).get_all_by_series(series_id, offset, limit)

    def episodes_get_all_by_season(
        self,
        series_id: int,
        season: int,
        offset: int,
        limit: int,
    ) -> list[Episode]:
        with self._session_scope() as session:
            return EpisodeRepository(session).get_all_by_season(series_id, season, offset, limit)

    def episodes_count_by_series(self, series_id: int) -> int:
        with self._session_scope() as session:
            return EpisodeRepository(session).count_by_series(series_id)

    def episodes_count_by_season(self, series_id: int, season: int) -> int:
        with self._session_scope() as session:
            return EpisodeRepository(session).count_by_season(series_id, season)

    def episode_put(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        entity: Episode,
    ) -> None:
        with self._session_scope() as session:
            EpisodeRepository(session).put(series_id, season, episode, contributor_id, entity)

    def episode_update(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        columns: Columns,
    ) -> None:
        with self._session_scope() as session:
            EpisodeRepository(session).update(series_id, season, episode, contributor_id, columns)

    def episode_invalidate(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        with self._session_scope() as session:
            EpisodeRepository(session).invalidate(
                series_id, season, episode, contributor_id, invalidation
            )

    def episodes_invalidate_all_by_season(
        self,
        series_id: int,
        season: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        with self._session_scope() as session:
            EpisodeRepository(session).invalidate_all_by_season(
                series_id, season, contributor_id, invalidation
            )

    def episodes_invalidate_all_by_series(
        self,
        series_id: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        with self._session_scope() as session:
            EpisodeRepository(session).invalidate_all_by_series(
                series_id, contributor_id, invalidation
            )

    def episode_audits_get_all(
        self,
        series_id: int,
        season: int,
        episode: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_get_all(
                series_id, season, episode, offset, limit
            )

    def episode_audits_count(self, series_id: int, season: int, episode: int) -> int:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_count(series_id, season, episode)

    def episodes_audits_get_all_by_season(
        self,
        series_id: int,
        season: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_get_all_by_season(
                series_id, season, offset, limit
            )

    def episodes_audits_count_by_season(self, series_id: int, season: int) -> int:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_count_by_season(series_id, season)

    def episodes_audits_get_all_by_series(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_get_all_by_series(series_id, offset, limit)

    def episodes_audits_count_by_series(self, series_id: int) -> int:
        with self._session_scope() as session:
            return EpisodeRepository(session).audits_count_by_series(series_id)


class SessionRepository(Repository):
    """Repository bound to one open session.

    Operations run inside the caller's transaction; commit and rollback
    belong to the Repository.transaction() call that created it.
    """

    def __init__(self, session: Session) -> None:
        """Bind to an open session.

        Args:
            session: Session owned by the enclosing transaction.
        """
        self._session = session

    @property
    def session(self) -> Session:
        """Get the bound session."""
        return self._session

    @contextmanager
    def _session_scope(self) -> Generator[Session, None, None]:
        yield self._session

    def transaction(self, fn: Callable[[Repository], T]) -> T:
        """Run fn in the already open transaction.

        Args:
            fn: Callback receiving this repository.

        Returns:
            Whatever fn returns.
        """
        return fn(self)
