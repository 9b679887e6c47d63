"""Run the API server: ``python -m watch_server`` or ``watch-server``."""

import uvicorn

from watch_server.settings import settings


def main() -> None:
    """Start uvicorn with settings from the environment."""
    uvicorn.run(
        "watch_server.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        workers=None if settings.api.reload else settings.api.workers,
        log_level=settings.logging.level.lower(),
        timeout_graceful_shutdown=settings.api.shutdown_timeout,
    )


if __name__ == "__main__":
    main()
