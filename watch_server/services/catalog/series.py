"""Series operations, including cascading invalidation to episodes."""

from watch_server.database import NoRecordError, Repository
from watch_server.database.models import Series, SeriesesAudit
from watch_server.services.catalog.errors import not_found_on_no_record
from watch_server.services.catalog.requests import (
    InvalidationRequest,
    SeriesCreateRequest,
    SeriesUpdateRequest,
)
from watch_server.utils.logger import setup_logger

logger = setup_logger("catalog.series")


class SeriesOperations:
    """Series catalog operations."""

    _repository: Repository

    def series_get(self, series_id: int) -> Series:
        """Retrieve a series.

        Raises:
            NotFoundError: If the series does not exist.
        """
        with not_found_on_no_record():
            return self._repository.series_get(series_id)

    def serieses_get_all(self, offset: int, limit: int) -> tuple[list[Series], int]:
        """Retrieve a page of serieses and the total count."""

        def page(tx: Repository) -> tuple[list[Series], int]:
            return tx.serieses_get_all(offset, limit), tx.serieses_count()

        return self._repository.transaction(page)

    def series_create(self, contributor_id: int, req: SeriesCreateRequest) -> int:
        """Create a series and return its id."""
        series = Series(
            title=req.title,
            descriptions=req.descriptions,
            date_started=req.date_started,
            date_ended=req.date_ended,
        )
        self._repository.series_create(contributor_id, series)
        return series.id

    def series_update(
        self,
        series_id: int,
        contributor_id: int,
        req: SeriesUpdateRequest,
    ) -> None:
        """Apply a sparse series update.

        Raises:
            NotFoundError: If the series does not exist.
        """
        with not_found_on_no_record():
            self._repository.series_update(series_id, contributor_id, req.to_columns())

    def series_invalidate(
        self,
        series_id: int,
        contributor_id: int,
        req: InvalidationRequest,
    ) -> None:
        """Soft-delete a series and every one of its episodes.

        A series without episodes is invalidated alone.

        Raises:
            NotFoundError: If the series does not exist.
        """

        def invalidate(tx: Repository) -> None:
            with not_found_on_no_record():
                tx.series_invalidate(series_id, contributor_id, req.invalidation)
            try:
                tx.episodes_invalidate_all_by_series(series_id, contributor_id, req.invalidation)
            except NoRecordError:
                logger.debug(f"Series {series_id} has no episodes to invalidate")

        self._repository.transaction(invalidate)
        logger.info(f"Invalidated series {series_id}")

    def series_audits_get_all(
        self,
        series_id: int,
        offset: int,
        limit: int,
    ) -> tuple[list[SeriesesAudit], int]:
        """Retrieve a page of series history and its total count.

        Raises:
            NotFoundError: If the series does not exist.
        """

        def page(tx: Repository) -> tuple[list[SeriesesAudit], int]:
            with not_found_on_no_record():
                tx.series_get(series_id)
            return (
                tx.series_audits_get_all(series_id, offset, limit),
                tx.series_audits_count(series_id),
            )

        return self._repository.transaction(page)
