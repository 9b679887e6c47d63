"""Request models accepted by the catalog application.

Field bounds come from ValidationSettings. Update requests are sparse:
only fields present in the request body with a non-null value are
written.
"""

from datetime import date
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from watch_server.services.hasher import MAX_PASSWORD_BYTES
from watch_server.settings import settings

_v = settings.validation

SPECIAL_CHARACTERS = frozenset("@#$%^&*_-+=(){}[]|\\:;\"'`<>.,~!?/")

# =============================================================================
# FIELD TYPES
# =============================================================================

Email = Annotated[
    EmailStr,
    Field(min_length=_v.email_min_length, max_length=_v.email_max_length),
]
FirstName = Annotated[
    str,
    Field(min_length=_v.first_name_min_length, max_length=_v.first_name_max_length),
]
LastName = Annotated[
    str,
    Field(min_length=_v.last_name_min_length, max_length=_v.last_name_max_length),
]
Bio = Annotated[str, Field(min_length=_v.bio_min_length, max_length=_v.bio_max_length)]
Birthdate = Annotated[date, Field(ge=_v.birthdate_min)]

FilmTitle = Annotated[
    str,
    Field(min_length=_v.film_title_min_length, max_length=_v.film_title_max_length),
]
FilmDescriptions = Annotated[
    str,
    Field(
        min_length=_v.film_descriptions_min_length,
        max_length=_v.film_descriptions_max_length,
    ),
]
DateReleased = Annotated[date, Field(ge=_v.film_date_released_min)]
Duration = Annotated[int, Field(ge=_v.film_duration_min, le=_v.film_duration_max)]

SeriesTitle = Annotated[
    str,
    Field(min_length=_v.series_title_min_length, max_length=_v.series_title_max_length),
]
SeriesDescriptions = Annotated[
    str,
    Field(
        min_length=_v.series_descriptions_min_length,
        max_length=_v.series_descriptions_max_length,
    ),
]
DateStarted = Annotated[date, Field(ge=_v.series_date_started_min)]
DateEnded = Annotated[date, Field(ge=_v.series_date_ended_min)]


def check_password_bytes(value: str) -> str:
    """Reject passwords bcrypt cannot take whole.

    Raises:
        ValueError: If the UTF-8 encoding exceeds MAX_PASSWORD_BYTES.
    """
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must not exceed {MAX_PASSWORD_BYTES} bytes")
    return value


def check_password(value: str) -> str:
    """Check a password against the configured composition rules.

    Args:
        value: Candidate password.

    Returns:
        The unchanged password.

    Raises:
        ValueError: If a length or composition rule is not met.
    """
    if not _v.password_min_length <= len(value) <= _v.password_max_length:
        raise ValueError(
            f"password must be {_v.password_min_length} to "
            f"{_v.password_max_length} characters long"
        )
    check_password_bytes(value)

    numbers = sum(c.isdigit() for c in value)
    lower = sum(c.islower() for c in value)
    upper = sum(c.isupper() for c in value)
    special = sum(c in SPECIAL_CHARACTERS for c in value)

    if numbers < _v.password_required_numbers:
        raise ValueError(f"password must contain at least {_v.password_required_numbers} digit(s)")
    if lower < _v.password_required_lower:
        raise ValueError(
            f"password must contain at least {_v.password_required_lower} lowercase letter(s)"
        )
    if upper < _v.password_required_upper:
        raise ValueError(
            f"password must contain at least {_v.password_required_upper} uppercase letter(s)"
        )
    if special < _v.password_required_special:
        raise ValueError(
            f"password must contain at least {_v.password_required_special} special character(s)"
        )
    return value


Password = Annotated[
    str,
    Field(min_length=1, max_length=_v.password_max_length),
    AfterValidator(check_password_bytes),
]


# =============================================================================
# BASE
# =============================================================================


class PatchRequest(BaseModel):
    """Sparse update request."""

    model_config = ConfigDict(extra="forbid")

    def to_columns(self) -> dict[str, Any]:
        """Collect submitted, non-null fields as a column patch.

        Returns:
            Column name to value mapping.
        """
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# =============================================================================
# USERS
# =============================================================================


class UserCreateRequest(BaseModel):
    """Registration request."""

    email: Email
    password: Password
    first_name: FirstName | None = None
    last_name: LastName | None = None
    bio: Bio | None = None
    birthdate: Birthdate | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Apply composition rules to the password."""
        return check_password(v)


class UserLoginRequest(BaseModel):
    """Login request."""

    email: Email
    password: Password


class UserUpdateRequest(PatchRequest):
    """Profile update request."""

    first_name: FirstName | None = None
    last_name: LastName | None = None
    bio: Bio | None = None
    birthdate: Birthdate | None = None


class UserEmailUpdateRequest(BaseModel):
    """Email change request."""

    email: Email


class UserPasswordUpdateRequest(BaseModel):
    """Password change request."""

    current_password: Password
    new_password: Password

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        """Apply composition rules to the new password."""
        return check_password(v)


class UserDeleteRequest(BaseModel):
    """Account deletion request."""

    password: Password


# =============================================================================
# CATALOG
# =============================================================================


class InvalidationRequest(BaseModel):
    """Soft-delete request carrying the reason."""

    invalidation: str = Field(
        min_length=_v.invalidation_min_length,
        max_length=_v.invalidation_max_length,
    )


class MovieCreateRequest(BaseModel):
    """Movie creation request."""

    title: FilmTitle
    descriptions: FilmDescriptions | None = None
    date_released: DateReleased
    duration: Duration | None = None


class MovieUpdateRequest(PatchRequest):
    """Movie update request."""

    title: FilmTitle | None = None
    descriptions: FilmDescriptions | None = None
    date_released: DateReleased | None = None
    duration: Duration | None = None


class SeriesCreateRequest(BaseModel):
    """Series creation request."""

    title: SeriesTitle
    descriptions: SeriesDescriptions | None = None
    date_started: DateStarted
    date_ended: DateEnded | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "SeriesCreateRequest":
        """Reject series ending before they start."""
        if self.date_ended is not None and self.date_ended < self.date_started:
            raise ValueError("date_ended must not be before date_started")
        return self


class SeriesUpdateRequest(PatchRequest):
    """Series update request."""

    title: SeriesTitle | None = None
    descriptions: SeriesDescriptions | None = None
    date_started: DateStarted | None = None
    date_ended: DateEnded | None = None


class EpisodePutRequest(BaseModel):
    """Full episode content, replacing whatever is stored."""

    title: FilmTitle
    descriptions: FilmDescriptions | None = None
    date_released: DateReleased
    duration: Duration | None = None


class EpisodesPutAllBySeasonRequest(BaseModel):
    """Ordered episodes of a season; numbering follows list order."""

    episodes: list[EpisodePutRequest] = Field(min_length=1, max_length=_v.array_max_length)


class EpisodeUpdateRequest(PatchRequest):
    """Episode update request."""

    title: FilmTitle | None = None
    descriptions: FilmDescriptions | None = None
    date_released: DateReleased | None = None
    duration: Duration | None = None
