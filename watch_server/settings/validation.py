"""Request validation bounds.

Lengths, value ranges and password composition rules applied to
incoming request bodies.
"""

from datetime import date

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidationSettings(BaseSettings):
    """Request validation configuration."""

    # Generic request bounds
    invalidation_min_length: int = Field(default=1, alias="VALIDATION_INVALIDATION_MIN_LENGTH")
    invalidation_max_length: int = Field(default=255, alias="VALIDATION_INVALIDATION_MAX_LENGTH")
    array_max_length: int = Field(default=100, alias="VALIDATION_ARRAY_MAX_LENGTH")

    # User
    email_min_length: int = Field(default=5, alias="VALIDATION_EMAIL_MIN_LENGTH")
    email_max_length: int = Field(default=255, alias="VALIDATION_EMAIL_MAX_LENGTH")
    password_min_length: int = Field(default=8, alias="VALIDATION_PASSWORD_MIN_LENGTH")
    password_max_length: int = Field(default=64, alias="VALIDATION_PASSWORD_MAX_LENGTH")
    password_required_numbers: int = Field(default=1, alias="VALIDATION_PASSWORD_NUMBERS")
    password_required_lower: int = Field(default=1, alias="VALIDATION_PASSWORD_LOWER")
    password_required_upper: int = Field(default=1, alias="VALIDATION_PASSWORD_UPPER")
    password_required_special: int = Field(default=1, alias="VALIDATION_PASSWORD_SPECIAL")
    first_name_min_length: int = Field(default=1, alias="VALIDATION_FIRST_NAME_MIN_LENGTH")
    first_name_max_length: int = Field(default=64, alias="VALIDATION_FIRST_NAME_MAX_LENGTH")
    last_name_min_length: int = Field(default=1, alias="VALIDATION_LAST_NAME_MIN_LENGTH")
    last_name_max_length: int = Field(default=64, alias="VALIDATION_LAST_NAME_MAX_LENGTH")
    bio_min_length: int = Field(default=1, alias="VALIDATION_BIO_MIN_LENGTH")
    bio_max_length: int = Field(default=1024, alias="VALIDATION_BIO_MAX_LENGTH")
    birthdate_min: date = Field(default=date(1900, 1, 1), alias="VALIDATION_BIRTHDATE_MIN")

    # Films (movies and episodes)
    film_title_min_length: int = Field(default=1, alias="VALIDATION_FILM_TITLE_MIN_LENGTH")
    film_title_max_length: int = Field(default=255, alias="VALIDATION_FILM_TITLE_MAX_LENGTH")
    film_descriptions_min_length: int = Field(default=1, alias="VALIDATION_FILM_DESCRIPTIONS_MIN_LENGTH")
    film_descriptions_max_length: int = Field(default=4096, alias="VALIDATION_FILM_DESCRIPTIONS_MAX_LENGTH")
    film_date_released_min: date = Field(default=date(1888, 1, 1), alias="VALIDATION_FILM_DATE_RELEASED_MIN")
    film_duration_min: int = Field(default=1, alias="VALIDATION_FILM_DURATION_MIN")
    film_duration_max: int = Field(default=1000, alias="VALIDATION_FILM_DURATION_MAX")
    season_number_max: int = Field(default=100, alias="VALIDATION_SEASON_NUMBER_MAX")
    episode_number_max: int = Field(default=1000, alias="VALIDATION_EPISODE_NUMBER_MAX")

    # Series
    series_title_min_length: int = Field(default=1, alias="VALIDATION_SERIES_TITLE_MIN_LENGTH")
    series_title_max_length: int = Field(default=255, alias="VALIDATION_SERIES_TITLE_MAX_LENGTH")
    series_descriptions_min_length: int = Field(default=1, alias="VALIDATION_SERIES_DESCRIPTIONS_MIN_LENGTH")
    series_descriptions_max_length: int = Field(default=4096, alias="VALIDATION_SERIES_DESCRIPTIONS_MAX_LENGTH")
    series_date_started_min: date = Field(default=date(1928, 1, 1), alias="VALIDATION_SERIES_DATE_STARTED_MIN")
    series_date_ended_min: date = Field(default=date(1928, 1, 1), alias="VALIDATION_SERIES_DATE_ENDED_MIN")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
