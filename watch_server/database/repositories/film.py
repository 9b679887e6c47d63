"""Movie and episode repositories over the shared films table.

Movies are rows whose discriminators (series_id, season_number,
episode_number) are all NULL; episodes have all three set. Rows are
translated to Movie or Episode entities here and nowhere else.
"""

from sqlalchemy import ColumnElement, select

from watch_server.database.entities import Episode, Movie
from watch_server.database.models import Film, FilmsAudit
from watch_server.database.repositories.base import Columns, ContributedRepository

# =============================================================================
# ROW CONVERSION
# =============================================================================


def _movie_from_row(row: Film) -> Movie:
    return Movie(
        id=row.id,
        title=row.title,
        descriptions=row.descriptions,
        date_released=row.date_released,
        duration=row.duration,
        contributed_by=row.contributed_by,
        contributed_at=row.contributed_at,
        invalidation=row.invalidation,
    )


def _episode_from_row(row: Film) -> Episode:
    return Episode(
        id=row.id,
        series_id=row.series_id,
        season_number=row.season_number,
        episode_number=row.episode_number,
        title=row.title,
        descriptions=row.descriptions,
        date_released=row.date_released,
        duration=row.duration,
        contributed_by=row.contributed_by,
        contributed_at=row.contributed_at,
        invalidation=row.invalidation,
    )


def _write_back(entity: Movie | Episode, row: Film) -> None:
    """Copy generated and stamped values from a row into its entity."""
    entity.id = row.id
    entity.contributed_by = row.contributed_by
    entity.contributed_at = row.contributed_at
    entity.invalidation = row.invalidation


# =============================================================================
# MOVIES
# =============================================================================


class MovieRepository(ContributedRepository[Film, FilmsAudit]):
    """Repository for standalone movies."""

    model = Film
    audit_model = FilmsAudit
    entity_name = "movie"

    def _scope(self) -> list[ColumnElement[bool]]:
        return [
            Film.series_id.is_(None),
            Film.season_number.is_(None),
            Film.episode_number.is_(None),
        ]

    def get(self, movie_id: int) -> Movie:
        """Retrieve movie by id.

        Raises:
            NoRecordError: If no movie has this id.
        """
        return _movie_from_row(self._fetch_one(Film.id == movie_id))

    def get_all(self, offset: int, limit: int) -> list[Movie]:
        """Retrieve a page of movies ordered by id."""
        rows = self._fetch_page(offset=offset, limit=limit)
        return [_movie_from_row(row) for row in rows]

    def count(self) -> int:
        """Count all movies."""
        return self._count()

    def create(self, contributor_id: int, movie: Movie) -> None:
        """Insert a movie; id and contribution stamps are written back.

        Args:
            contributor_id: Acting user id.
            movie: Movie to insert.
        """
        row = Film(
            title=movie.title,
            descriptions=movie.descriptions,
            date_released=movie.date_released,
            duration=movie.duration,
        )
        self._insert(row, contributor_id)
        _write_back(movie, row)

    def update(self, movie_id: int, contributor_id: int, columns: Columns) -> None:
        """Patch the given movie columns.

        Raises:
            NoRecordError: If no movie has this id.
        """
        self._contribute(
            Film.id == movie_id,
            contributor_id=contributor_id,
            values=columns,
        )

    def invalidate(self, movie_id: int, contributor_id: int, invalidation: str) -> None:
        """Soft-delete a movie with a reason.

        Raises:
            NoRecordError: If no movie has this id.
        """
        self.update(movie_id, contributor_id, {"invalidation": invalidation})

    def _audit_criteria(self, movie_id: int) -> list[ColumnElement[bool]]:
        return [FilmsAudit.id == movie_id, FilmsAudit.series_id.is_(None)]

    def audits_get_all(self, movie_id: int, offset: int, limit: int) -> list[FilmsAudit]:
        """Retrieve movie history, newest first."""
        return self._fetch_audits(
            *self._audit_criteria(movie_id),
            offset=offset,
            limit=limit,
        )

    def audits_count(self, movie_id: int) -> int:
        """Count movie history rows."""
        return self._count_audits(*self._audit_criteria(movie_id))


# =============================================================================
# EPISODES
# =============================================================================


class EpisodeRepository(ContributedRepository[Film, FilmsAudit]):
    """Repository for series episodes.

    Episodes are addressed by (series_id, season_number, episode_number).
    """

    model = Film
    audit_model = FilmsAudit
    entity_name = "episode"

    def _scope(self) -> list[ColumnElement[bool]]:
        return [
            Film.series_id.is_not(None),
            Film.season_number.is_not(None),
            Film.episode_number.is_not(None),
        ]

    @staticmethod
    def _key(
        series_id: int,
        season: int | None = None,
        episode: int | None = None,
    ) -> list[ColumnElement[bool]]:
        criteria = [Film.series_id == series_id]
        if season is not None:
            criteria.append(Film.season_number == season)
        if episode is not None:
            criteria.append(Film.episode_number == episode)
        return criteria

    @staticmethod
    def _audit_key(
        series_id: int,
        season: int | None = None,
        episode: int | None = None,
    ) -> list[ColumnElement[bool]]:
        criteria = [FilmsAudit.series_id == series_id]
        if season is not None:
            criteria.append(FilmsAudit.season_number == season)
        if episode is not None:
            criteria.append(FilmsAudit.episode_number == episode)
        return criteria

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, series_id: int, season: int, episode: int) -> Episode:
        """Retrieve one episode.

        Raises:
            NoRecordError: If the episode does not exist.
        """
        return _episode_from_row(self._fetch_one(*self._key(series_id, season, episode)))

    def get_all_by_series(self, series_id: int, offset: int, limit: int) -> list[Episode]:
        """Retrieve a page of a series' episodes ordered by id."""
        rows = self._fetch_page(*self._key(series_id), offset=offset, limit=limit)
        return [_episode_from_row(row) for row in rows]

    def get_all_by_season(
        self,
        series_id: int,
        season: int,
        offset: int,
        limit: int,
    ) -> list[Episode]:
        """Retrieve a page of a season's episodes ordered by id."""
        rows = self._fetch_page(
            *self._key(series_id, season),
            offset=offset,
            limit=limit,
        )
        return [_episode_from_row(row) for row in rows]

    def count_by_series(self, series_id: int) -> int:
        """Count a series' episodes."""
        return self._count(*self._key(series_id))

    def count_by_season(self, series_id: int, season: int) -> int:
        """Count a season's episodes."""
        return self._count(*self._key(series_id, season))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def put(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        entity: Episode,
    ) -> None:
        """Create or replace the episode at the given position.

        Title, descriptions, release date and duration are overwritten,
        any invalidation is cleared. Key, id and contribution stamps are
        written back into entity.

        Args:
            series_id: Owning series id.
            season: Season number.
            episode: Episode number.
            contributor_id: Acting user id.
            entity: Episode content.
        """
        stmt = select(Film).where(*self._key(series_id, season, episode))
        row = self._session.scalars(stmt).first()
        if row is None:
            row = Film(
                series_id=series_id,
                season_number=season,
                episode_number=episode,
                title=entity.title,
                descriptions=entity.descriptions,
                date_released=entity.date_released,
                duration=entity.duration,
            )
            self._insert(row, contributor_id)
        else:
            values = self._stamp(
                {
                    "title": entity.title,
                    "descriptions": entity.descriptions,
                    "date_released": entity.date_released,
                    "duration": entity.duration,
                    "invalidation": None,
                },
                contributor_id,
            )
            for name, value in values.items():
                setattr(row, name, value)
            self._session.flush()
            self._record([row])

        entity.series_id = series_id
        entity.season_number = season
        entity.episode_number = episode
        _write_back(entity, row)

    def update(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        columns: Columns,
    ) -> None:
        """Patch the given episode columns.

        Raises:
            NoRecordError: If the episode does not exist.
        """
        self._contribute(
            *self._key(series_id, season, episode),
            contributor_id=contributor_id,
            values=columns,
        )

    def invalidate(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        """Soft-delete one episode.

        Raises:
            NoRecordError: If the episode does not exist.
        """
        self.update(series_id, season, episode, contributor_id, {"invalidation": invalidation})

    def invalidate_all_by_season(
        self,
        series_id: int,
        season: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        """Soft-delete every episode of a season.

        Raises:
            NoRecordError: If the season has no episodes.
        """
        self._contribute(
            *self._key(series_id, season),
            contributor_id=contributor_id,
            values={"invalidation": invalidation},
        )

    def invalidate_all_by_series(
        self,
        series_id: int,
        contributor_id: int,
        invalidation: str,
    ) -> None:
        """Soft-delete every episode of a series.

        Raises:
            NoRecordError: If the series has no episodes.
        """
        self._contribute(
            *self._key(series_id),
            contributor_id=contributor_id,
            values={"invalidation": invalidation},
        )

    # -------------------------------------------------------------------------
    # Audits
    # -------------------------------------------------------------------------

    def audits_get_all(
        self,
        series_id: int,
        season: int,
        episode: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        """Retrieve one episode's history, newest first."""
        return self._fetch_audits(
            *self._audit_key(series_id, season, episode),
            offset=offset,
            limit=limit,
        )

    def audits_count(self, series_id: int, season: int, episode: int) -> int:
        """Count one episode's history rows."""
        return self._count_audits(*self._audit_key(series_id, season, episode))

    def audits_get_all_by_season(
        self,
        series_id: int,
        season: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        """Retrieve a season's history, newest first."""
        return self._fetch_audits(
            *self._audit_key(series_id, season),
            offset=offset,
            limit=limit,
        )

    def audits_count_by_season(self, series_id: int, season: int) -> int:
        """Count a season's history rows."""
        return self._count_audits(*self._audit_key(series_id, season))

    def audits_get_all_by_series(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> list[FilmsAudit]:
        """Retrieve a series' episode history, newest first."""
        return self._fetch_audits(
            *self._audit_key(series_id),
            offset=offset,
            limit=limit,
        )

    def audits_count_by_series(self, series_id: int) -> int:
        """Count a series' episode history rows."""
        return self._count_audits(*self._audit_key(series_id))
