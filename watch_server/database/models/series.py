"""Series model - a show grouping episodes."""

from datetime import date

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from watch_server.database.models.base import Base, ContributionMixin


class Series(Base, ContributionMixin):
    """Series entity.

    Attributes:
        id: Primary key.
        title: Series title.
        descriptions: Optional synopsis.
        date_started: First air date.
        date_ended: Last air date, None while running.
    """

    __tablename__ = "serieses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    descriptions: Mapped[str | None] = mapped_column(Text)
    date_started: Mapped[date] = mapped_column(Date, nullable=False)
    date_ended: Mapped[date | None] = mapped_column(Date)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Series(id={self.id}, title='{self.title}')>"
