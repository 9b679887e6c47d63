"""Domain entities for films.

Movies and episodes share the films table but are distinct types here.
Conversion to and from Film rows happens only inside the repositories.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(kw_only=True)
class Movie:
    """Standalone movie.

    Attributes:
        id: Primary key, None until created.
        title: Movie title.
        date_released: Release date.
        descriptions: Optional synopsis.
        duration: Runtime in minutes.
        contributed_by: Last contributor.
        contributed_at: Last contribution time.
        invalidation: Soft-delete reason.
    """

    title: str
    date_released: date
    descriptions: str | None = None
    duration: int | None = None
    id: int | None = None
    contributed_by: int | None = None
    contributed_at: datetime | None = None
    invalidation: str | None = None


@dataclass(kw_only=True)
class Episode:
    """Episode of a series, keyed by (series_id, season_number, episode_number)."""

    series_id: int
    season_number: int
    episode_number: int
    title: str
    date_released: date
    descriptions: str | None = None
    duration: int | None = None
    id: int | None = None
    contributed_by: int | None = None
    contributed_at: datetime | None = None
    invalidation: str | None = None
