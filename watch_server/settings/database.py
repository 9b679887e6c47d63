"""Catalog store settings.

The store is addressed either by a full DATABASE_URL or by POSTGRES_*
parts. SQLite URLs are accepted for local runs and tests.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class DatabaseSettings(BaseSettings):
    """Catalog store connection and pool configuration.

    Attributes:
        url: Full SQLAlchemy URL, takes precedence over the parts.
        host: PostgreSQL host.
        port: PostgreSQL port.
        name: Database name.
        user: Database role.
        password: Role password.
        pool_size: Connections kept open by the pool.
        pool_overflow: Extra connections allowed under load.
        pool_timeout: Seconds to wait for a free connection.
        pool_recycle: Seconds after which a pooled connection is replaced.
    """

    url: str | None = Field(default=None, alias="DATABASE_URL")
    host: str = Field(default="localhost", alias="POSTGRES_HOST")
    port: int = Field(default=5432, alias="POSTGRES_PORT")
    name: str = Field(default="watch", alias="POSTGRES_DB")
    user: str = Field(default="watch_user", alias="POSTGRES_USER")
    password: str = Field(default="", alias="POSTGRES_PASSWORD")

    pool_size: int = Field(default=5, ge=1, alias="DB_POOL_SIZE")
    pool_overflow: int = Field(default=10, ge=0, alias="DB_POOL_OVERFLOW")
    pool_timeout: int = Field(default=30, ge=1, alias="DB_POOL_TIMEOUT")
    pool_recycle: int = Field(default=1800, alias="DB_POOL_RECYCLE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def connection_url(self) -> str:
        """SQLAlchemy URL of the catalog store."""
        if self.url:
            return self.url
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        ).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        """Whether the store is SQLite."""
        return self.connection_url.startswith("sqlite")
