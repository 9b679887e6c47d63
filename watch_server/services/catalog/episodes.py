"""Episode operations."""

from watch_server.database import Episode, Repository
from watch_server.database.models import FilmsAudit
from watch_server.services.catalog.errors import not_found_on_no_record
from watch_server.services.catalog.requests import (
    EpisodePutRequest,
    EpisodesPutAllBySeasonRequest,
    EpisodeUpdateRequest,
    InvalidationRequest,
)
from watch_server.utils.logger import setup_logger

logger = setup_logger("catalog.episodes")


def _episode_from_request(
    series_id: int,
    season: int,
    episode: int,
    req: EpisodePutRequest,
) -> Episode:
    return Episode(
        series_id=series_id,
        season_number=season,
        episode_number=episode,
        title=req.title,
        descriptions=req.descriptions,
        date_released=req.date_released,
        duration=req.duration,
    )


class EpisodeOperations:
    """Episode catalog operations."""

    _repository: Repository

    def episode_get(self, series_id: int, season: int, episode: int) -> Episode:
        """Retrieve an episode.

        Raises:
            NotFoundError: If the episode does not exist.
        """
        with not_found_on_no_record():
            return self._repository.episode_get(series_id, season, episode)

    def episodes_get_all_by_series(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> tuple[list[Episode], int]:
        """Retrieve a page of a series' episodes and the total count."""

        def page(tx: Repository) -> tuple[list[Episode], int]:
            return (
                tx.episodes_get_all_by_series(series_id, offset, limit),
                tx.episodes_count_by_series(series_id),
            )

        return self._repository.transaction(page)

    def episodes_get_all_by_season(
        self,
        series_id: int,
        season: int,
        offset: int,
        limit: int,
    ) -> tuple[list[Episode], int]:
        """Retrieve a page of a season's episodes and the total count."""

        def page(tx: Repository) -> tuple[list[Episode], int]:
            return (
                tx.episodes_get_all_by_season(series_id, season, offset, limit),
                tx.episodes_count_by_season(series_id, season),
            )

        return self._repository.transaction(page)

    def episode_put(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        req: EpisodePutRequest,
    ) -> None:
        """Create or replace one episode.

        Raises:
            NotFoundError: If the series does not exist.
        """

        def put(tx: Repository) -> None:
            with not_found_on_no_record():
                tx.series_get(series_id)
            tx.episode_put(
                series_id,
                season,
                episode,
                contributor_id,
                _episode_from_request(series_id, season, episode, req),
            )

        self._repository.transaction(put)

    def episodes_put_all_by_season(
        self,
        series_id: int,
        season: int,
        contributor_id: int,
        req: EpisodesPutAllBySeasonRequest,
    ) -> None:
        """Write a whole season, numbering episodes 1..N in list order.

        Raises:
            NotFoundError: If the series does not exist.
        """

        def put_all(tx: Repository) -> None:
            with not_found_on_no_record():
                tx.series_get(series_id)
            for number, item in enumerate(req.episodes, start=1):
                tx.episode_put(
                    series_id,
                    season,
                    number,
                    contributor_id,
                    _episode_from_request(series_id, season, number, item),
                )

        self._repository.transaction(put_all)
        logger.info(f"Put {len(req.episodes)} episodes in series {series_id} season {season}")

    def episode_update(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        req: EpisodeUpdateRequest,
    ) -> None:
        """Apply a sparse episode update.

        Raises:
            NotFoundError: If the episode does not exist.
        """
        with not_found_on_no_record():
            self._repository.episode_update(
                series_id, season, episode, contributor_id, req.to_columns()
            )

    def episode_invalidate(
        self,
        series_id: int,
        season: int,
        episode: int,
        contributor_id: int,
        req: InvalidationRequest,
    ) -> None:
        """Soft-delete one episode.

        Raises:
            NotFoundError: If the episode does not exist.
        """
        with not_found_on_no_record():
            self._repository.episode_invalidate(
                series_id, season, episode, contributor_id, req.invalidation
            )

    def episodes_invalidate_all_by_season(
        self,
        series_id: int,
        season: int,
        contributor_id: int,
        req: InvalidationRequest,
    ) -> None:
        """Soft-delete every episode of a season.

        Raises:
            NotFoundError: If the season has no episodes.
        """
        with not_found_on_no_record():
            self._repository.episodes_invalidate_all_by_season(
                series_id, season, contributor_id, req.invalidation
            )

    def episode_audits_get_all(
        self,
        series_id: int,
        season: int,
        episode: int,
        offset: int,
        limit: int,
    ) -> tuple[list[FilmsAudit], int]:
        """Retrieve a page of episode history and its total count.

        Raises:
            NotFoundError: If the episode does not exist.
        """

        def page(tx: Repository) -> tuple[list[FilmsAudit], int]:
            with not_found_on_no_record():
                tx.episode_get(series_id, season, episode)
            return (
                tx.episode_audits_get_all(series_id, season, episode, offset, limit),
                tx.episode_audits_count(series_id, season, episode),
            )

        return self._repository.transaction(page)
