"""API configuration settings.

FastAPI, security (JWT, password hashing), CORS and pagination settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """FastAPI configuration.

    Attributes:
        host: API host address.
        port: API port.
        reload: Enable auto-reload in development.
        workers: Number of worker processes.
        shutdown_timeout: Seconds granted to in-flight requests on shutdown.
    """

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")
    workers: int = Field(default=4, alias="API_WORKERS")
    shutdown_timeout: int = Field(default=10, ge=1, alias="API_SHUTDOWN_TIMEOUT")
    title: str = Field(default="Watch Server API", alias="API_TITLE")
    version: str = Field(default="1.0.0", alias="API_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class SecuritySettings(BaseSettings):
    """JWT, password hashing and rate limiting configuration.

    Attributes:
        jwt_secret_key: Secret key for JWT signing.
        jwt_algorithm: JWT algorithm (HS512 by default).
        jwt_access_expire_minutes: Access token lifetime.
        jwt_refresh_expire_minutes: Refresh token lifetime.
        bcrypt_rounds: bcrypt cost factor.
        rate_limit_per_minute: Max requests per minute per client.
    """

    jwt_secret_key: str = Field(alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS512", alias="JWT_ALGORITHM")
    jwt_access_expire_minutes: int = Field(default=15, alias="JWT_ACCESS_EXPIRE_MINUTES")
    jwt_refresh_expire_minutes: int = Field(
        default=7 * 24 * 60,
        alias="JWT_REFRESH_EXPIRE_MINUTES",
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")
    rate_limit_per_minute: int = Field(default=100, alias="RATE_LIMIT_PER_MINUTE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CORSSettings(BaseSettings):
    """CORS configuration.

    Attributes:
        origins_raw: Comma-separated allowed origins.
    """

    origins_raw: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def origins(self) -> list[str]:
        """Parse origins from comma-separated string."""
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]


class PaginationSettings(BaseSettings):
    """Pagination query parameters configuration.

    Attributes:
        page_var: Query parameter holding the 1-based page number.
        per_page_var: Query parameter holding the page size.
        default_per_page: Page size used when none is given.
        max_per_page: Upper bound page sizes are clamped to.
    """

    page_var: str = Field(default="page", alias="PAGINATION_PAGE_VAR")
    per_page_var: str = Field(default="per_page", alias="PAGINATION_PER_PAGE_VAR")
    default_per_page: int = Field(default=20, ge=1, alias="PAGINATION_DEFAULT_PER_PAGE")
    max_per_page: int = Field(default=100, ge=1, alias="PAGINATION_MAX_PER_PAGE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
