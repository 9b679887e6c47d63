"""Database connection pool management with SQLAlchemy 2.0.

Provides synchronous sessions with connection pooling and
lifecycle management.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from watch_server.settings import settings
from watch_server.utils.logger import setup_logger

logger = setup_logger("database.connection")


class DatabaseConnection:
    """Manages the database connection pool.

    This class implements the Singleton pattern to ensure a single
    connection pool is shared across the application.

    Example:
        ```python
        db = DatabaseConnection()
        with db.session() as session:
            result = session.execute(text("SELECT 1"))
        ```
    """

    _instance: "DatabaseConnection | None" = None
    _initialized: bool = False

    def __new__(cls) -> "DatabaseConnection":
        """Create singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize connection pool if not already done."""
        if DatabaseConnection._initialized:
            return

        self._sync_engine = self._create_sync_engine()
        self._sync_session_factory = self._create_sync_session_factory()
        DatabaseConnection._initialized = True

    @staticmethod
    def _create_sync_engine() -> Engine:
        """Create SQLAlchemy engine.

        PostgreSQL uses a QueuePool sized from settings; SQLite uses the
        dialect's default pool.

        Returns:
            SQLAlchemy Engine.
        """
        if settings.database.is_sqlite:
            return create_engine(
                settings.database.connection_url,
                connect_args={"check_same_thread": False},
                echo=settings.debug,
            )
        return create_engine(
            settings.database.connection_url,
            poolclass=QueuePool,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.pool_overflow,
            pool_timeout=settings.database.pool_timeout,
            pool_recycle=settings.database.pool_recycle,
            pool_pre_ping=True,
            echo=settings.debug,
        )

    def _create_sync_session_factory(self) -> sessionmaker[Session]:
        """Create session factory.

        Returns:
            Configured sessionmaker.
        """
        return sessionmaker(
            bind=self._sync_engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope.

        Automatically commits on success, rolls back on exception,
        and closes the session when done.

        Yields:
            SQLAlchemy Session instance.

        Raises:
            Exception: Re-raises any exception after rollback.
        """
        session = self._sync_session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """Test database connectivity with a simple query.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database connectivity check failed: {e}")
            return False

    def dispose(self) -> None:
        """Dispose the connection pool and release resources.

        Should be called during application shutdown.
        """
        self._sync_engine.dispose()

    @property
    def sync_engine(self) -> Engine:
        """Get the underlying engine."""
        return self._sync_engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get the session factory."""
        return self._sync_session_factory


# =============================================================================
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# =============================================================================

_db: DatabaseConnection | None = None


def get_database() -> DatabaseConnection:
    """Get the singleton DatabaseConnection instance.

    Creates the instance on first call (lazy initialization).

    Returns:
        DatabaseConnection singleton instance.
    """
    global _db  # noqa: PLW0603
    if _db is None:
        _db = DatabaseConnection()
    return _db


def init_database() -> None:
    """Initialize database connection pool.

    Call during application startup to eagerly create connections.
    """
    db = get_database()
    if db.check_connection():
        logger.info("Database connection established")
    else:
        logger.error("Database connection failed")


def close_database() -> None:
    """Close database connection pool.

    Call during application shutdown to release resources.
    """
    global _db  # noqa: PLW0603
    if _db is not None:
        _db.dispose()
        _db = None
        DatabaseConnection._instance = None
        DatabaseConnection._initialized = False
        logger.info("Database connections closed")
