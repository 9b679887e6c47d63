"""User repository.

Translates unique violations on users.email into EmailTakenError.
"""

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from watch_server.database.errors import EmailTakenError, NoRecordError
from watch_server.database.models import User
from watch_server.database.repositories.base import BaseRepository, Columns


def _is_email_violation(exc: IntegrityError) -> bool:
    return "email" in str(exc.orig).lower()


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations."""

    model = User
    entity_name = "user"

    def get(self, user_id: int) -> User:
        """Retrieve user by id.

        Raises:
            NoRecordError: If the user does not exist.
        """
        return self._fetch_one(User.id == user_id)

    def get_by_email(self, email: str) -> User:
        """Retrieve user by email.

        Raises:
            NoRecordError: If no user has this email.
        """
        return self._fetch_one(User.email == email)

    def count(self) -> int:
        """Count registered users."""
        return self._count()

    def create(self, user: User) -> User:
        """Insert a new user; the generated id is set on the instance.

        Args:
            user: Unsaved user.

        Returns:
            The persisted user.

        Raises:
            EmailTakenError: If the email is already registered.
        """
        self._session.add(user)
        try:
            self._session.flush()
        except IntegrityError as e:
            if _is_email_violation(e):
                raise EmailTakenError(user.email) from e
            raise
        return user

    def update(self, user_id: int, columns: Columns) -> None:
        """Patch the given user columns.

        An empty patch only checks that the user exists.

        Args:
            user_id: User primary key.
            columns: Columns to overwrite.

        Raises:
            NoRecordError: If the user does not exist.
            EmailTakenError: If the new email is already registered.
        """
        if not columns:
            self.get(user_id)
            return
        try:
            self._patch(User.id == user_id, values=columns)
        except IntegrityError as e:
            if _is_email_violation(e):
                raise EmailTakenError(str(columns.get("email"))) from e
            raise

    def delete(self, user_id: int) -> None:
        """Hard-delete a user.

        Raises:
            NoRecordError: If the user does not exist.
        """
        result = self._session.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NoRecordError(self.entity_name)
