"""Shared pytest fixtures.

Environment variables are set before anything from watch_server is
imported, since settings are read once at import time. Storage runs on
an in-memory SQLite database shared through a StaticPool.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test_jwt_secret_key_12345678901234567890")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import Generator  # noqa: E402
from datetime import date  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from watch_server.database import Repository  # noqa: E402
from watch_server.database.models import Base, Series, User  # noqa: E402
from watch_server.services.catalog import Application  # noqa: E402
from watch_server.services.hasher import PasswordHasher  # noqa: E402
from watch_server.services.token import TokenService  # noqa: E402

TEST_PASSWORD = "Secr3t!pass"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with every table created."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the test engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def repository(session_factory: sessionmaker[Session]) -> Repository:
    """Repository over the test database."""
    return Repository(session_factory)


@pytest.fixture
def hasher() -> PasswordHasher:
    """Low-cost bcrypt hasher."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service() -> TokenService:
    """Token service using the test secret."""
    return TokenService()


@pytest.fixture
def application(
    repository: Repository,
    token_service: TokenService,
    hasher: PasswordHasher,
) -> Application:
    """Application wired to the test database."""
    return Application(repository=repository, token_service=token_service, hasher=hasher)


@pytest.fixture
def contributor(repository: Repository, hasher: PasswordHasher) -> User:
    """Registered user acting as contributor."""
    user = User(email="contributor@example.com", hashed_password=hasher.hash(TEST_PASSWORD))
    repository.user_create(user)
    return user


@pytest.fixture
def series(repository: Repository, contributor: User) -> Series:
    """Stored series without episodes."""
    row = Series(title="Twin Peaks", date_started=date(1990, 4, 8))
    repository.series_create(contributor.id, row)
    return row
