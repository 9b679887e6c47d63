"""Tests for the application lifespan."""

from unittest.mock import patch

from watch_server.api.main import create_app, lifespan
from watch_server.settings import settings


class TestLifespan:
    @staticmethod
    async def test_verifies_database_and_closes_it() -> None:
        with (
            patch("watch_server.api.main._verify_database_connection") as verify,
            patch("watch_server.api.main.close_database") as close,
        ):
            async with lifespan(create_app()):
                verify.assert_called_once_with()
                close.assert_not_called()

        close.assert_called_once_with()

    @staticmethod
    async def test_logs_masked_configuration() -> None:
        with (
            patch("watch_server.api.main._verify_database_connection"),
            patch("watch_server.api.main.close_database"),
            patch("watch_server.api.main.logger") as logger,
        ):
            async with lifespan(create_app()):
                pass

        message = logger.debug.call_args.args[0]
        assert message.startswith("Configuration: ")
        assert "***MASKED***" in message
        assert settings.security.jwt_secret_key not in message
