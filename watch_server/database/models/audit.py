"""Audit models - append-only snapshots of catalog rows.

One row is appended each time a film or series is created, updated or
invalidated. Rows are never updated or deleted.
"""

from datetime import date

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from watch_server.database.models.base import AuditMixin, Base


class FilmsAudit(Base, AuditMixin):
    """Snapshot of a films row."""

    __tablename__ = "films_audit"

    id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    descriptions: Mapped[str | None] = mapped_column(Text)
    date_released: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer)
    series_id: Mapped[int | None] = mapped_column(Integer)
    season_number: Mapped[int | None] = mapped_column(Integer)
    episode_number: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (
        Index(
            "idx_films_audit_episode",
            "series_id",
            "season_number",
            "episode_number",
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<FilmsAudit(audit_id={self.audit_id}, id={self.id}, "
            f"contributed_at={self.contributed_at})>"
        )


class SeriesesAudit(Base, AuditMixin):
    """Snapshot of a serieses row."""

    __tablename__ = "serieses_audit"

    id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    descriptions: Mapped[str | None] = mapped_column(Text)
    date_started: Mapped[date] = mapped_column(Date, nullable=False)
    date_ended: Mapped[date | None] = mapped_column(Date)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SeriesesAudit(audit_id={self.audit_id}, id={self.id}, "
            f"contributed_at={self.contributed_at})>"
        )
