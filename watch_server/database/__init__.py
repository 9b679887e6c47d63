"""Database layer: models, repositories and connection management."""

from watch_server.database.connection import (
    DatabaseConnection,
    close_database,
    get_database,
    init_database,
)
from watch_server.database.entities import Episode, Movie
from watch_server.database.errors import EmailTakenError, NoRecordError, RepositoryError
from watch_server.database.repository import Repository, SessionRepository

__all__ = [
    "DatabaseConnection",
    "get_database",
    "init_database",
    "close_database",
    "Movie",
    "Episode",
    "RepositoryError",
    "NoRecordError",
    "EmailTakenError",
    "Repository",
    "SessionRepository",
]
