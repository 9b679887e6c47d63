"""Film model - movies and series episodes share one table.

A movie has series_id, season_number and episode_number all NULL; an
episode has all three set.
"""

from datetime import date

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from watch_server.database.models.base import Base, ContributionMixin


class Film(Base, ContributionMixin):
    """Movie or episode row.

    Attributes:
        id: Primary key.
        title: Film title.
        descriptions: Optional synopsis.
        date_released: Release date.
        duration: Runtime in minutes.
        series_id: Owning series (episodes only).
        season_number: Season number (episodes only).
        episode_number: Episode number within the season (episodes only).
    """

    __tablename__ = "films"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    descriptions: Mapped[str | None] = mapped_column(Text)
    date_released: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer)

    # Discriminators
    series_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("serieses.id"),
        index=True,
    )
    season_number: Mapped[int | None] = mapped_column(Integer)
    episode_number: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (
        UniqueConstraint(
            "series_id",
            "season_number",
            "episode_number",
            name="uq_films_episode",
        ),
        CheckConstraint(
            "(series_id IS NULL AND season_number IS NULL AND episode_number IS NULL)"
            " OR (series_id IS NOT NULL AND season_number IS NOT NULL"
            " AND episode_number IS NOT NULL)",
            name="check_films_discriminators",
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Film(id={self.id}, title='{self.title}', series_id={self.series_id})>"
