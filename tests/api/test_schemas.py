"""Unit tests for API response schemas."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from watch_server.api.schemas import (
    EpisodeResponse,
    HealthResponse,
    MovieResponse,
    PaginationParams,
    ResponseValue,
    Status,
    UserResponse,
    ok,
    paginated,
)
from watch_server.database import Episode, Movie
from watch_server.database.models import User


class TestResponseValue:
    """Tests for the response envelope."""

    @staticmethod
    def test_unset_fields_omitted() -> None:
        """Only status is emitted for an empty success."""
        assert ok().model_dump(mode="json") == {"status": "OK"}

    @staticmethod
    def test_payload_and_message() -> None:
        body = ok(7, message="created").model_dump(mode="json")
        assert body == {"status": "OK", "message": "created", "payload": 7}

    @staticmethod
    def test_error_status_values() -> None:
        """Status codes serialize to their wire names."""
        body = ResponseValue(status=Status.INVALID_URL_PARAMETER).model_dump(mode="json")
        assert body == {"status": "InvalidURLParameter"}
        assert Status.TOKEN_MISSING_OR_MALFORMED.value == "TokenMissingOrMalformed"

    @staticmethod
    def test_falsy_payload_kept() -> None:
        assert ok([]).model_dump(mode="json") == {"status": "OK", "payload": []}


class TestPaginated:
    """Tests for paginated envelopes."""

    @staticmethod
    def test_page_metadata() -> None:
        body = paginated(PaginationParams(page=2, per_page=20), ["a"], total=41)

        assert body.page == 2
        assert body.per_page == 20
        assert body.page_count == 3
        assert body.total_items == 41
        assert body.payload == ["a"]

    @staticmethod
    def test_empty_collection() -> None:
        body = paginated(PaginationParams(page=1, per_page=20), [], total=0).model_dump(mode="json")
        assert body == {
            "status": "OK",
            "payload": [],
            "page": 1,
            "per_page": 20,
            "page_count": 0,
            "total_items": 0,
        }

    @staticmethod
    def test_exact_multiple() -> None:
        body = paginated(PaginationParams(page=1, per_page=10), [], total=30)
        assert body.page_count == 3


class TestPaginationParams:
    """Tests for PaginationParams."""

    @staticmethod
    def test_offset() -> None:
        assert PaginationParams(page=3, per_page=20).offset == 40

    @staticmethod
    def test_first_page_offset() -> None:
        assert PaginationParams().offset == 0

    @staticmethod
    def test_page_must_be_positive() -> None:
        with pytest.raises(ValidationError):
            PaginationParams(page=0)


class TestEntityResponses:
    """Tests for catalog and user response models."""

    @staticmethod
    def test_movie_from_entity() -> None:
        movie = Movie(
            id=1,
            title="Alien",
            date_released=date(1979, 5, 25),
            contributed_by=3,
            contributed_at=datetime(2024, 1, 1, 12, 0),
        )

        response = MovieResponse.model_validate(movie)

        assert response.title == "Alien"
        assert response.invalidation is None

    @staticmethod
    def test_episode_from_entity() -> None:
        episode = Episode(
            id=5,
            series_id=2,
            season_number=1,
            episode_number=3,
            title="Zen",
            date_released=date(1990, 4, 19),
            contributed_by=3,
            contributed_at=datetime(2024, 1, 1, 12, 0),
        )

        response = EpisodeResponse.model_validate(episode)

        assert (response.series_id, response.season_number, response.episode_number) == (2, 1, 3)

    @staticmethod
    def test_user_hides_password_digest() -> None:
        user = User(
            id=1,
            email="laura@example.com",
            hashed_password="$2b$04$digest",
            joined_at=datetime(2024, 1, 1),
        )

        body = UserResponse.model_validate(user).model_dump()

        assert "hashed_password" not in body
        assert body["email"] == "laura@example.com"


class TestHealthResponse:
    """Tests for HealthResponse schema."""

    @staticmethod
    def test_defaults() -> None:
        response = HealthResponse(status="healthy", version="1.0.0")
        assert response.database.connected is False
        assert isinstance(response.timestamp, datetime)
