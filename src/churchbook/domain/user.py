"""User domain service.

Passwords are stored as salted bcrypt hashes and compared with
``bcrypt.checkpw``, which is constant-time.
"""

from dataclasses import replace
from typing import TYPE_CHECKING, Optional

import bcrypt
import structlog

from churchbook.domain.entities import User as UserEntity
from churchbook.domain.errors import (
    ACCOUNT_DEACTIVATED,
    INVALID_CREDENTIALS,
    AccountDeactivatedError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    duplicate_value,
    user_not_found,
)
from churchbook.domain.validation import (
    check_length,
    require_text,
    validate_email,
    validate_password_strength,
    validate_role,
)

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
MAX_USERNAME = 50
MAX_FULL_NAME = 200
MAX_PHONE = 12


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash password using bcrypt with the given cost factor."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class UserService:
    """Service for managing login users."""

    def __init__(self, db: "Database", bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        """Initialize user service.

        Args:
            db: Database instance
            bcrypt_rounds: bcrypt cost factor used for new password hashes
        """
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds
        self._unknown_user_hash: Optional[str] = None

    def _hash_for_unknown_user(self) -> str:
        """Hash checked when the username does not exist, so both paths cost one bcrypt check."""
        if self._unknown_user_hash is None:
            self._unknown_user_hash = hash_password("unknown-user-password", self.bcrypt_rounds)
        return self._unknown_user_hash

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str,
        role: str,
        phone_number: str = "",
    ) -> UserEntity:
        """Create an active user (signup).

        Args:
            username: Unique login name
            email: Unique email address
            password: Plaintext password; only its hash is stored
            full_name: Display name
            role: One of Admin, Treasurer, Clerk
            phone_number: Optional phone number

        Returns:
            Created user entity

        Raises:
            WeakPasswordError: If the password fails a strength rule
            InvalidRoleError: If the role is not recognised
            InvalidEmailError: If the email is malformed
            DuplicateUsernameError: If the username is taken
            DuplicateEmailError: If the email is taken
        """
        username = require_text("Username", username, MAX_USERNAME)
        full_name = require_text("Full name", full_name, MAX_FULL_NAME)
        validate_password_strength(password)
        validate_role(role)
        validate_email(email)
        phone_number = phone_number or ""
        check_length("Phone number", phone_number, MAX_PHONE)

        if self.db.get_user_by_username(username) is not None:
            raise DuplicateUsernameError(duplicate_value("User", "username", username))

        if self.db.get_user_by_email(email) is not None:
            raise DuplicateEmailError(duplicate_value("User", "email", email))

        user = self.db.create_user(
            username=username,
            email=email,
            password_hash=hash_password(password, self.bcrypt_rounds),
            full_name=full_name,
            role=role,
            phone_number=phone_number,
        )
        logger.info("user_created", user_id=user.id, username=username, role=role)
        return user

    def get_user(self, user_id: str) -> UserEntity:
        """Get user by ID.

        Raises:
            NotFoundError: If user doesn't exist
        """
        try:
            return self.db.get_user(user_id)
        except NotFoundError:
            raise NotFoundError(user_not_found(user_id))

    def get_user_by_username(self, username: str) -> UserEntity:
        user = self.db.get_user_by_username(username)
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    def get_user_by_email(self, email: str) -> UserEntity:
        user = self.db.get_user_by_email(email)
        if user is None:
            raise NotFoundError(f"User with email '{email}' not found")
        return user

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()

    def list_users_by_role(self, role: str) -> list[UserEntity]:
        """List users holding a role.

        Raises:
            InvalidRoleError: If the role is not recognised
        """
        validate_role(role)
        return self.db.list_users(role=role)

    def list_active_users(self) -> list[UserEntity]:
        return self.db.list_users(active_only=True)

    def update_user(
        self,
        user_id: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        role: Optional[str] = None,
        phone_number: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> UserEntity:
        """Update profile fields. Only supplied fields change.

        The password is changed through change_password only.

        Raises:
            NotFoundError: If user doesn't exist
            ValidationError: If a changed field is invalid
            DuplicateUsernameError: If the new username belongs to another user
            DuplicateEmailError: If the new email belongs to another user
        """
        user = self.get_user(user_id)
        changes = {}

        if username is not None and username != user.username:
            username = require_text("Username", username, MAX_USERNAME)
            existing = self.db.get_user_by_username(username)
            if existing is not None and existing.id != user_id:
                raise DuplicateUsernameError(duplicate_value("User", "username", username))
            changes["username"] = username

        if email is not None and email != user.email:
            validate_email(email)
            existing = self.db.get_user_by_email(email)
            if existing is not None and existing.id != user_id:
                raise DuplicateEmailError(duplicate_value("User", "email", email))
            changes["email"] = email

        if full_name is not None:
            changes["full_name"] = require_text("Full name", full_name, MAX_FULL_NAME)

        if role is not None:
            validate_role(role)
            changes["role"] = role

        if phone_number is not None:
            check_length("Phone number", phone_number, MAX_PHONE)
            changes["phone_number"] = phone_number

        if is_active is not None:
            changes["is_active"] = bool(is_active)

        updated = self.db.update_user(replace(user, **changes))
        logger.info("user_updated", user_id=user_id, fields=sorted(changes))
        return updated

    def deactivate_user(self, user_id: str) -> UserEntity:
        """Soft-delete a user by clearing its active flag.

        Raises:
            NotFoundError: If user doesn't exist
        """
        self.get_user(user_id)
        user = self.db.deactivate_user(user_id)
        logger.info("user_deactivated", user_id=user_id)
        return user

    def delete_user(self, user_id: str) -> None:
        """Hard-delete a user.

        Raises:
            NotFoundError: If user doesn't exist
        """
        self.get_user(user_id)
        self.db.delete_user(user_id)
        logger.info("user_deleted", user_id=user_id)

    def authenticate(self, username: str, password: str) -> UserEntity:
        """Check credentials and return the user.

        An unknown username and a wrong password raise the same error with
        the same message. A deactivated account is only reported once the
        password has been verified.

        Args:
            username: Login name
            password: Plaintext password

        Returns:
            Authenticated user entity (last_login refreshed when possible)

        Raises:
            InvalidCredentialsError: If the username or password is wrong
            AccountDeactivatedError: If the credentials are right but the user is inactive
        """
        user = self.db.get_user_by_username(username) if username else None
        password_hash = user.password_hash if user is not None else self._hash_for_unknown_user()
        if not verify_password(password or "", password_hash) or user is None:
            logger.info("authentication_failed", username=username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("authentication_rejected_inactive", user_id=user.id)
            raise AccountDeactivatedError(ACCOUNT_DEACTIVATED)

        try:
            self.db.update_last_login(user.id)
        except PersistenceError as e:
            logger.warning("last_login_update_failed", user_id=user.id, error=str(e))
        else:
            try:
                user = self.db.get_user(user.id)
            except (NotFoundError, PersistenceError) as e:
                logger.warning("last_login_refresh_failed", user_id=user.id, error=str(e))

        logger.info("user_authenticated", user_id=user.id)
        return user

    def change_password(self, user_id: str, old_password: str, new_password: str) -> None:
        """Replace a user's password after verifying the current one.

        Raises:
            NotFoundError: If user doesn't exist
            InvalidCredentialsError: If old_password doesn't match
            WeakPasswordError: If new_password fails a strength rule
        """
        user = self.get_user(user_id)

        if not verify_password(old_password or "", user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")

        if new_password is None:
            raise ValidationError("New password is required")
        validate_password_strength(new_password)

        self.db.update_user_password(user_id, hash_password(new_password, self.bcrypt_rounds))
        logger.info("user_password_changed", user_id=user_id)
