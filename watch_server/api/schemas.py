"""Pydantic schemas for API responses.

Every endpoint answers with a ResponseValue envelope. Request bodies
are defined next to the application in services.catalog.requests.
"""

from datetime import date, datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

PayloadT = TypeVar("PayloadT")

# Largest value the store binds as an integer
MAX_INT64 = 2**63 - 1

# =============================================================================
# ENVELOPE
# =============================================================================


class Status(StrEnum):
    """Outcome code carried by every response."""

    OK = "OK"
    NOT_FOUND = "NotFound"
    INVALID_URL_PARAMETER = "InvalidURLParameter"
    INVALID_REQUEST = "InvalidRequest"
    EMAIL_ALREADY_USED = "EmailAlreadyUsed"
    EMAIL_NOT_FOUND = "EmailNotFound"
    INCORRECT_PASSWORD = "IncorrectPassword"
    SAME_NEW_PASSWORD = "SameNewPassword"
    TOKEN_INVALID = "TokenInvalid"
    TOKEN_MISSING_OR_MALFORMED = "TokenMissingOrMalformed"
    INTERNAL_SERVER_ERROR = "InternalServerError"


class ResponseValue(BaseModel, Generic[PayloadT]):
    """Response envelope.

    Unset fields are omitted from the JSON body.

    Attributes:
        status: Outcome code.
        message: Optional human-readable detail.
        payload: Response data.
        page: Current 1-based page (paginated responses).
        per_page: Page size (paginated responses).
        page_count: Number of pages (paginated responses).
        total_items: Number of items across all pages (paginated responses).
    """

    status: Status
    message: str | None = None
    payload: PayloadT | None = None
    page: int | None = None
    per_page: int | None = None
    page_count: int | None = None
    total_items: int | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class PaginationParams(BaseModel):
    """Pagination query parameters, already clamped."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        """Calculate SQL offset from page number."""
        return (self.page - 1) * self.per_page


def ok(payload: PayloadT | None = None, message: str | None = None) -> ResponseValue[PayloadT]:
    """Build a successful envelope."""
    return ResponseValue(status=Status.OK, message=message, payload=payload)


def paginated(
    pagination: PaginationParams,
    items: list[PayloadT],
    total: int,
) -> ResponseValue[list[PayloadT]]:
    """Build a successful paginated envelope.

    Args:
        pagination: Page requested.
        items: Items of that page.
        total: Item count across all pages.

    Returns:
        Envelope with page metadata.
    """
    return ResponseValue(
        status=Status.OK,
        payload=items,
        page=pagination.page,
        per_page=pagination.per_page,
        page_count=(total + pagination.per_page - 1) // pagination.per_page,
        total_items=total,
    )


# =============================================================================
# HEALTH
# =============================================================================


class DatabaseComponentHealth(BaseModel):
    """Database connection health status."""

    connected: bool = False
    pool_available: int | None = None


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    database: DatabaseComponentHealth = Field(default_factory=DatabaseComponentHealth)
    timestamp: datetime = Field(default_factory=datetime.now)


# =============================================================================
# AUTHENTICATION
# =============================================================================


class TokenPair(BaseModel):
    """Access and refresh tokens issued at login."""

    access_token: str
    refresh_token: str


# =============================================================================
# USERS
# =============================================================================


class UserResponse(BaseModel):
    """Public user profile. The password digest is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    birthdate: date | None = None
    joined_at: datetime


# =============================================================================
# CATALOG
# =============================================================================


class ContributionFields(BaseModel):
    """Contribution stamps shared by catalog responses."""

    model_config = ConfigDict(from_attributes=True)

    contributed_by: int
    contributed_at: datetime
    invalidation: str | None = None


class MovieResponse(ContributionFields):
    """Movie details."""

    id: int
    title: str
    descriptions: str | None = None
    date_released: date
    duration: int | None = None


class EpisodeResponse(MovieResponse):
    """Episode details."""

    series_id: int
    season_number: int
    episode_number: int


class SeriesResponse(ContributionFields):
    """Series details."""

    id: int
    title: str
    descriptions: str | None = None
    date_started: date
    date_ended: date | None = None


class FilmAuditResponse(ContributionFields):
    """Snapshot of a movie or episode."""

    audit_id: int
    id: int
    title: str
    descriptions: str | None = None
    date_released: date
    duration: int | None = None
    series_id: int | None = None
    season_number: int | None = None
    episode_number: int | None = None


class SeriesAuditResponse(ContributionFields):
    """Snapshot of a series."""

    audit_id: int
    id: int
    title: str
    descriptions: str | None = None
    date_started: date
    date_ended: date | None = None
