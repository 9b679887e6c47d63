"""Series repository.

Every write appends a SeriesesAudit snapshot.
"""

from watch_server.database.models import Series, SeriesesAudit
from watch_server.database.repositories.base import Columns, ContributedRepository


class SeriesRepository(ContributedRepository[Series, SeriesesAudit]):
    """Repository for Series entity operations."""

    model = Series
    audit_model = SeriesesAudit
    entity_name = "series"

    def get(self, series_id: int) -> Series:
        """Retrieve series by id.

        Raises:
            NoRecordError: If the series does not exist.
        """
        return self._fetch_one(Series.id == series_id)

    def get_all(self, offset: int, limit: int) -> list[Series]:
        """Retrieve a page of serieses ordered by id."""
        return self._fetch_page(offset=offset, limit=limit)

    def count(self) -> int:
        """Count all serieses."""
        return self._count()

    def create(self, contributor_id: int, series: Series) -> Series:
        """Insert a series; the generated id is set on the instance.

        Args:
            contributor_id: Acting user id.
            series: Unsaved series.

        Returns:
            The persisted series.
        """
        return self._insert(series, contributor_id)

    def update(self, series_id: int, contributor_id: int, columns: Columns) -> None:
        """Patch the given series columns.

        Raises:
            NoRecordError: If the series does not exist.
        """
        self._contribute(
            Series.id == series_id,
            contributor_id=contributor_id,
            values=columns,
        )

    def invalidate(self, series_id: int, contributor_id: int, invalidation: str) -> None:
        """Soft-delete a series with a reason.

        Raises:
            NoRecordError: If the series does not exist.
        """
        self.update(series_id, contributor_id, {"invalidation": invalidation})

    def audits_get_all(self, series_id: int, offset: int, limit: int) -> list[SeriesesAudit]:
        """Retrieve series history, newest first."""
        return self._fetch_audits(
            SeriesesAudit.id == series_id,
            offset=offset,
            limit=limit,
        )

    def audits_count(self, series_id: int) -> int:
        """Count series history rows."""
        return self._count_audits(SeriesesAudit.id == series_id)
