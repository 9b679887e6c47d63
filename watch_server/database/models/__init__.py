"""SQLAlchemy ORM models for the Watch Server database.

Usage:
    from watch_server.database.models import Base, Film, Series, User

Tables:
    - users: Registered accounts
    - serieses: Series
    - films: Movies and series episodes
    - films_audit: Film history
    - serieses_audit: Series history
"""

from watch_server.database.models.audit import FilmsAudit, SeriesesAudit
from watch_server.database.models.base import AuditMixin, Base, ContributionMixin
from watch_server.database.models.film import Film
from watch_server.database.models.series import Series
from watch_server.database.models.user import User

__all__ = [
    "Base",
    "ContributionMixin",
    "AuditMixin",
    "User",
    "Series",
    "Film",
    "FilmsAudit",
    "SeriesesAudit",
]
