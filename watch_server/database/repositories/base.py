"""
Base repositories with generic query and patch operations.

Provides reusable base classes for all repositories: lookups that
raise NoRecordError on zero rows, paginated listing, counting and
column patches, plus audit snapshots for contributor-stamped tables.
"""

from collections.abc import Mapping, Sequence
from datetime import UTC, date, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.orm import Session

from watch_server.database.errors import NoRecordError
from watch_server.database.models.base import Base

# Type alias for valid database field values
FieldValue = str | int | date | datetime | None

# Column name -> new value, holding only the fields to change
Columns = Mapping[str, FieldValue]

# Generic type variable bound to Base model
ModelT = TypeVar("ModelT", bound=Base)
AuditT = TypeVar("AuditT", bound=Base)


def utc_now() -> datetime:
    """Current server time used for contribution stamps."""
    return datetime.now(UTC)


class BaseRepository(Generic[ModelT]):
    """Generic repository providing common query operations.

    Attributes:
        model: SQLAlchemy model class.
        entity_name: Entity kind reported by NoRecordError.
        session: Database session.
    """

    model: type[ModelT]
    entity_name: str = "record"

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session

    @property
    def session(self) -> Session:
        """Get the database session."""
        return self._session

    def _scope(self) -> list[ColumnElement[bool]]:
        """Filters applied to every statement of this repository."""
        return []

    def _select(self, *criteria: ColumnElement[bool]) -> Select[tuple[ModelT]]:
        return select(self.model).where(*self._scope(), *criteria)

    def _fetch_one(self, *criteria: ColumnElement[bool]) -> ModelT:
        """Retrieve the single row matching criteria.

        Args:
            *criteria: Filter expressions.

        Returns:
            Matching model instance.

        Raises:
            NoRecordError: If no row matches.
        """
        row = self._session.scalars(self._select(*criteria)).first()
        if row is None:
            raise NoRecordError(self.entity_name)
        return row

    def _fetch_page(
        self,
        *criteria: ColumnElement[bool],
        offset: int,
        limit: int,
    ) -> list[ModelT]:
        """Retrieve a page of rows ordered by primary key.

        Args:
            *criteria: Filter expressions.
            offset: Number of rows to skip.
            limit: Maximum number of rows.

        Returns:
            List of model instances, empty when nothing matches.
        """
        stmt = (
            self._select(*criteria)
            .order_by(self.model.id)
            .offset(offset)
            .limit(limit)
        )
        return list(self._session.scalars(stmt).all())

    def _count(self, *criteria: ColumnElement[bool]) -> int:
        """Count rows matching criteria.

        Args:
            *criteria: Filter expressions.

        Returns:
            Total count.
        """
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*self._scope(), *criteria)
        )
        return self._session.execute(stmt).scalar() or 0

    def _patch(self, *criteria: ColumnElement[bool], values: Columns) -> list[ModelT]:
        """Apply a column patch to matching rows.

        Args:
            *criteria: Filter expressions.
            values: Column values to write.

        Returns:
            The patched rows, reloaded from the database.

        Raises:
            NoRecordError: If zero rows were affected.
        """
        where = [*self._scope(), *criteria]
        stmt = (
            update(self.model)
            .where(*where)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        if result.rowcount == 0:
            raise NoRecordError(self.entity_name)

        reload = (
            select(self.model)
            .where(*where)
            .order_by(self.model.id)
            .execution_options(populate_existing=True)
        )
        return list(self._session.scalars(reload).all())


class ContributedRepository(BaseRepository[ModelT], Generic[ModelT, AuditT]):
    """Repository for contributor-stamped rows with an audit table.

    Every write goes through _record(), which appends one audit snapshot
    per affected row.

    Attributes:
        audit_model: Audit snapshot model class.
    """

    audit_model: type[AuditT]

    @staticmethod
    def _stamp(values: Columns, contributor_id: int) -> dict[str, Any]:
        """Add contribution columns to a patch."""
        return {
            **values,
            "contributed_by": contributor_id,
            "contributed_at": utc_now(),
        }

    def _snapshot_columns(self) -> list[str]:
        return [
            column.key
            for column in self.audit_model.__table__.columns
            if column.key != "audit_id"
        ]

    def _record(self, rows: Sequence[ModelT]) -> None:
        """Append one audit snapshot per row.

        Args:
            rows: Rows in their post-write state.
        """
        columns = self._snapshot_columns()
        self._session.add_all(
            self.audit_model(**{name: getattr(row, name) for name in columns})
            for row in rows
        )
        self._session.flush()

    def _insert(self, row: ModelT, contributor_id: int) -> ModelT:
        """Stamp, insert and audit a new row.

        Args:
            row: Unsaved model instance.
            contributor_id: Acting user id.

        Returns:
            The persisted row with its generated id.
        """
        row.contributed_by = contributor_id
        row.contributed_at = utc_now()
        row.invalidation = None
        self._session.add(row)
        self._session.flush()
        self._record([row])
        return row

    def _contribute(
        self,
        *criteria: ColumnElement[bool],
        contributor_id: int,
        values: Columns,
    ) -> list[ModelT]:
        """Stamp and patch matching rows, then audit them.

        Raises:
            NoRecordError: If zero rows were affected.
        """
        rows = self._patch(*criteria, values=self._stamp(values, contributor_id))
        self._record(rows)
        return rows

    def _audit_select(self, *criteria: ColumnElement[bool]) -> Select[tuple[AuditT]]:
        return select(self.audit_model).where(*criteria)

    def _fetch_audits(
        self,
        *criteria: ColumnElement[bool],
        offset: int,
        limit: int,
    ) -> list[AuditT]:
        """Retrieve audit snapshots, newest first.

        Args:
            *criteria: Filter expressions on the audit model.
            offset: Number of rows to skip.
            limit: Maximum number of rows.

        Returns:
            List of audit rows.
        """
        stmt = (
            self._audit_select(*criteria)
            .order_by(
                self.audit_model.contributed_at.desc(),
                self.audit_model.audit_id.desc(),
            )
            .offset(offset)
            .limit(limit)
        )
        return list(self._session.scalars(stmt).all())

    def _count_audits(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.audit_model).where(*criteria)
        return self._session.execute(stmt).scalar() or 0
