"""Storage-layer exceptions."""


class RepositoryError(Exception):
    """Base exception for repository failures interpreted by the storage layer."""

    pass


class NoRecordError(RepositoryError):
    """Raised when a lookup, update or invalidation matched zero rows."""

    def __init__(self, entity: str = "record") -> None:
        """Initialize with the entity kind that was not found.

        Args:
            entity: Name of the missing entity (e.g. 'movie').
        """
        self.entity = entity
        super().__init__(f"no {entity} found")


class EmailTakenError(RepositoryError):
    """Raised when a write violates the unique constraint on users.email."""

    def __init__(self, email: str | None = None) -> None:
        """Initialize with the conflicting email.

        Args:
            email: Email address already registered, if known.
        """
        self.email = email
        super().__init__("email already registered")
