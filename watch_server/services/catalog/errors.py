"""Domain errors raised by the catalog application."""

from collections.abc import Generator
from contextlib import contextmanager

from watch_server.database.errors import NoRecordError


class ApplicationError(Exception):
    """Base exception for domain failures."""

    pass


class NotFoundError(ApplicationError):
    """Raised when the requested entity does not exist."""

    def __init__(self, entity: str = "record") -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class EmailAlreadyUsedError(ApplicationError):
    """Raised when an email is already registered to another user."""

    def __init__(self) -> None:
        super().__init__("email already used")


class IncorrectPasswordError(ApplicationError):
    """Raised when a supplied password does not match the stored one."""

    def __init__(self) -> None:
        super().__init__("incorrect password")


class TokenInvalidError(ApplicationError):
    """Raised when a presented token fails validation."""

    def __init__(self) -> None:
        super().__init__("token invalid")


class SameNewPasswordError(ApplicationError):
    """Raised when the new password equals the current one."""

    def __init__(self) -> None:
        super().__init__("same new password")


@contextmanager
def not_found_on_no_record() -> Generator[None, None, None]:
    """Translate NoRecordError raised inside the block into NotFoundError."""
    try:
        yield
    except NoRecordError as e:
        raise NotFoundError(e.entity) from e
