"""Password hashing with bcrypt."""

import bcrypt

from watch_server.settings import settings

# bcrypt rejects or truncates anything longer
MAX_PASSWORD_BYTES = 72


class PasswordMismatchError(Exception):
    """Raised when a password does not match its digest."""

    pass


class PasswordHasher:
    """Salted bcrypt hashing.

    Attributes:
        _rounds: bcrypt cost factor.
    """

    def __init__(self, rounds: int | None = None) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor. Defaults to BCRYPT_ROUNDS.
        """
        self._rounds = rounds if rounds is not None else settings.security.bcrypt_rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        Args:
            password: Plain password.

        Returns:
            bcrypt digest.
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def compare(digest: str, password: str) -> None:
        """Check a password against a digest.

        Args:
            digest: Stored bcrypt digest.
            password: Plain password to check.

        Raises:
            PasswordMismatchError: If the password does not match. A
                password longer than bcrypt accepts never matches.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise PasswordMismatchError("password does not match")
        if not bcrypt.checkpw(encoded, digest.encode("utf-8")):
            raise PasswordMismatchError("password does not match")


def get_password_hasher() -> PasswordHasher:
    """Factory function for PasswordHasher."""
    return PasswordHasher()
