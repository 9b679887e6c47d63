"""SQLAlchemy declarative base and common mixins.

Provides the foundation for all ORM models with common
columns and behaviors.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    All models should inherit from this class to be part
    of the same metadata and support table creation.
    """

    pass


class ContributionMixin:
    """Mixin for contributor-stamped catalog rows.

    Every mutation records the acting user, the server time and an
    optional invalidation reason (soft delete).
    """

    contributed_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    contributed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    invalidation: Mapped[str | None] = mapped_column(String(255))


class AuditMixin:
    """Mixin for append-only audit snapshots.

    Snapshot columns carry no foreign keys so that history survives
    the audited row.
    """

    audit_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contributed_by: Mapped[int] = mapped_column(Integer, nullable=False)
    contributed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    invalidation: Mapped[str | None] = mapped_column(String(255))
