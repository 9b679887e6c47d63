"""Database repositories for the Watch Server.

Per-entity repositories bound to one SQLAlchemy session. Lookups and
patches raise NoRecordError when nothing matches; writes to catalog
tables append audit snapshots.

Usage:
    from watch_server.database.repositories import MovieRepository

    with get_database().session() as session:
        movie = MovieRepository(session).get(1)
"""

from watch_server.database.repositories.base import (
    BaseRepository,
    Columns,
    ContributedRepository,
    FieldValue,
)
from watch_server.database.repositories.film import EpisodeRepository, MovieRepository
from watch_server.database.repositories.series import SeriesRepository
from watch_server.database.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ContributedRepository",
    "Columns",
    "FieldValue",
    "UserRepository",
    "SeriesRepository",
    "MovieRepository",
    "EpisodeRepository",
]
