"""FastAPI application entry point.

Creates and configures the Watch Server REST API with authentication,
rate limiting, Prometheus metrics and OpenAPI documentation.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from watch_server.api.errors import register_exception_handlers
from watch_server.api.routers import episodes, movies, series, users
from watch_server.api.schemas import DatabaseComponentHealth, HealthResponse
from watch_server.database import close_database, get_database
from watch_server.monitoring import PrometheusMiddleware, mount_metrics
from watch_server.settings import get_masked_settings, settings
from watch_server.utils.logger import setup_logger

logger = setup_logger("api.main")

API_PREFIX = "/v1"

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Validates database connection on startup and releases the pool
    on shutdown.

    Args:
        _app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    _verify_database_connection()
    logger.info(f"Watch Server {settings.api.version} started ({settings.environment})")
    logger.debug(f"Configuration: {get_masked_settings()}")
    yield
    close_database()


def _verify_database_connection() -> None:
    """Verify database is accessible on startup."""
    with get_database().sync_engine.connect() as conn:
        conn.execute(text("SELECT 1"))


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="REST API for the movie and series catalog",
        lifespan=lifespan,
        debug=settings.debug,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        openapi_url=f"{API_PREFIX}/openapi.json",
    )
    _configure_cors(app)
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)
    register_exception_handlers(app)
    _register_routers(app)
    app.add_api_route(
        f"{API_PREFIX}/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(users.public_router, prefix=API_PREFIX)
    app.include_router(users.router, prefix=API_PREFIX)
    app.include_router(movies.router, prefix=API_PREFIX)
    app.include_router(series.router, prefix=API_PREFIX)
    app.include_router(episodes.router, prefix=API_PREFIX)


# =============================================================================
# HEALTH
# =============================================================================


def health_check() -> HealthResponse:
    """Health check endpoint (no authentication required).

    Returns:
        API health status with database details.
    """
    database = _check_database()
    return HealthResponse(
        status="healthy" if database.connected else "degraded",
        version=settings.api.version,
        database=database,
    )


def _check_database() -> DatabaseComponentHealth:
    """Check database connection status."""
    try:
        engine = get_database().sync_engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check database failure: {e}")
        return DatabaseComponentHealth(connected=False)
    pool = engine.pool
    pool_available = pool.checkedin() if hasattr(pool, "checkedin") else None
    return DatabaseComponentHealth(connected=True, pool_available=pool_available)


app = create_app()
