"""User operations: registration, login, token refresh and profile changes."""

from watch_server.database import EmailTakenError, NoRecordError, Repository
from watch_server.database.models import User
from watch_server.services.catalog.errors import (
    EmailAlreadyUsedError,
    IncorrectPasswordError,
    SameNewPasswordError,
    TokenInvalidError,
    not_found_on_no_record,
)
from watch_server.services.catalog.requests import (
    UserCreateRequest,
    UserDeleteRequest,
    UserEmailUpdateRequest,
    UserLoginRequest,
    UserPasswordUpdateRequest,
    UserUpdateRequest,
)
from watch_server.services.hasher import PasswordHasher, PasswordMismatchError
from watch_server.services.token import InvalidTokenError, TokenService
from watch_server.utils.logger import setup_logger

logger = setup_logger("catalog.users")


class UserOperations:
    """User account operations.

    Attributes:
        _repository: Transaction-capable repository.
        _token_service: Token issuer and validator.
        _hasher: Password hasher.
    """

    _repository: Repository
    _token_service: TokenService
    _hasher: PasswordHasher

    def _verify_password(self, user: User, password: str) -> None:
        """Check a password against the user's digest.

        Raises:
            IncorrectPasswordError: On mismatch.
        """
        try:
            self._hasher.compare(user.hashed_password, password)
        except PasswordMismatchError as e:
            raise IncorrectPasswordError() from e

    def user_get(self, user_id: int) -> User:
        """Retrieve a user.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with not_found_on_no_record():
            return self._repository.user_get(user_id)

    def user_create(self, req: UserCreateRequest) -> int:
        """Register a new user.

        Args:
            req: Registration request.

        Returns:
            The new user id.

        Raises:
            EmailAlreadyUsedError: If the email is already registered.
        """

        def register(tx: Repository) -> int:
            try:
                tx.user_get_by_email(req.email)
            except NoRecordError:
                pass
            else:
                raise EmailAlreadyUsedError()

            user = User(
                email=req.email,
                hashed_password=self._hasher.hash(req.password),
                first_name=req.first_name,
                last_name=req.last_name,
                bio=req.bio,
                birthdate=req.birthdate,
            )
            tx.user_create(user)
            return user.id

        try:
            user_id = self._repository.transaction(register)
        except EmailTakenError as e:
            raise EmailAlreadyUsedError() from e

        logger.info(f"Registered user {user_id}")
        return user_id

    def user_login(self, req: UserLoginRequest) -> tuple[str, str]:
        """Authenticate and issue a token pair.

        Args:
            req: Login request.

        Returns:
            Tuple of (access token, refresh token).

        Raises:
            NotFoundError: If no user has this email.
            IncorrectPasswordError: If the password does not match.
        """
        with not_found_on_no_record():
            user = self._repository.user_get_by_email(req.email)

        self._verify_password(user, req.password)

        access_token = self._token_service.create_access_token(user.id)
        refresh_token = self._token_service.create_refresh_token(user.id)
        logger.debug(f"User {user.id} logged in")
        return access_token, refresh_token

    def user_refresh_token(self, refresh_token: str) -> str:
        """Issue a new access token from a valid token.

        Raises:
            TokenInvalidError: If the token fails validation.
        """
        try:
            payload = self._token_service.validate(refresh_token)
        except InvalidTokenError as e:
            raise TokenInvalidError() from e
        return self._token_service.create_access_token(payload.user_id)

    def user_update(self, user_id: int, req: UserUpdateRequest) -> None:
        """Apply a sparse profile update.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with not_found_on_no_record():
            self._repository.user_update(user_id, req.to_columns())

    def user_email_update(self, user_id: int, req: UserEmailUpdateRequest) -> None:
        """Change the user's email.

        Raises:
            NotFoundError: If the user does not exist.
            EmailAlreadyUsedError: If the email belongs to another user.
        """
        try:
            with not_found_on_no_record():
                self._repository.user_update(user_id, {"email": req.email})
        except EmailTakenError as e:
            raise EmailAlreadyUsedError() from e

    def user_password_update(self, user_id: int, req: UserPasswordUpdateRequest) -> None:
        """Change the user's password after verifying the current one.

        Raises:
            SameNewPasswordError: If both passwords are equal. Checked
                before any repository access.
            NotFoundError: If the user does not exist.
            IncorrectPasswordError: If the current password does not match.
        """
        if req.new_password == req.current_password:
            raise SameNewPasswordError()

        def change_password(tx: Repository) -> None:
            with not_found_on_no_record():
                user = tx.user_get(user_id)
            self._verify_password(user, req.current_password)
            tx.user_update(user_id, {"hashed_password": self._hasher.hash(req.new_password)})

        self._repository.transaction(change_password)
        logger.info(f"Password changed for user {user_id}")

    def user_delete(self, user_id: int, req: UserDeleteRequest) -> None:
        """Delete the user after verifying the password.

        Raises:
            NotFoundError: If the user does not exist.
            IncorrectPasswordError: If the password does not match.
        """

        def delete(tx: Repository) -> None:
            with not_found_on_no_record():
                user = tx.user_get(user_id)
            self._verify_password(user, req.password)
            tx.user_delete(user_id)

        self._repository.transaction(delete)
        logger.info(f"Deleted user {user_id}")

