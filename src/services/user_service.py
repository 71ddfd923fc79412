"""User service: CRUD over the users table with uniqueness enforcement."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.user import User

logger = logging.getLogger(__name__)

NAME_TAKEN = "A user with that name already exists."
EMAIL_TAKEN = "A user with that email already exists."


class UserServiceError(Exception):
    """Unexpected storage failure. The message is safe to return to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFoundError(UserServiceError):
    """The referenced user id does not exist."""

    def __init__(self, user_id: int):
        super().__init__(f"No user found with ID {user_id}.")
        self.user_id = user_id


class UserConflictError(UserServiceError):
    """A name or email is already held by another user."""

    def __init__(self, field: str):
        super().__init__(NAME_TAKEN if field == "name" else EMAIL_TAKEN)
        self.field = field


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> list[User]:
        """Return every user ordered by id."""
        try:
            return self.db.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            raise self._storage_failure("Could not retrieve users", e) from e

    def get_user(self, user_id: int) -> User:
        """Return the user with the given id."""
        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._storage_failure("Error retrieving the user", e) from e
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(self, name: str, email: str) -> User:
        """Insert a new user.

        The unique constraints on ``name`` and ``email`` decide whether the
        insert succeeds. When both clash, the name conflict is reported.
        """
        user = User(name=name, email=email)
        try:
            self.db.add(user)
            self.db.flush()
            user_id = user.id
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._conflict(e, name=name, email=email, order=("name", "email")) from e
        except SQLAlchemyError as e:
            raise self._storage_failure("Error creating the user", e) from e

        self._reload(user, user_id)
        logger.info(f"Created user {user_id} ({name})")
        return user

    def update_user(self, user_id: int, name: str, email: str) -> User:
        """Replace the name and email of an existing user.

        Only ``name`` and ``email`` change; the id is kept. When both clash
        with other users, the email conflict is reported.
        """
        user = self.get_user(user_id)
        try:
            user.name = name
            user.email = email
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._conflict(
                e, name=name, email=email, order=("email", "name"), exclude_id=user_id
            ) from e
        except SQLAlchemyError as e:
            raise self._storage_failure("Error updating the user", e) from e

        self._reload(user, user_id)
        logger.info(f"Updated user {user_id}")
        return user

    def delete_user(self, user_id: int) -> int:
        """Delete a user and return its id."""
        user = self.get_user(user_id)
        try:
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("Error deleting the user", e) from e
        logger.info(f"Deleted user {user_id}")
        return user_id

    def _reload(self, user: User, user_id: int) -> None:
        """Refresh a committed user. The write already happened if this fails."""
        try:
            self.db.refresh(user)
        except SQLAlchemyError as e:
            raise self._storage_failure(
                f"User {user_id} was saved but could not be reloaded", e
            ) from e

    def _conflict(
        self,
        error: IntegrityError,
        *,
        name: str,
        email: str,
        order: tuple[str, str],
        exclude_id: int | None = None,
    ) -> UserServiceError:
        """Work out which unique field an integrity error came from.

        Fields are checked in ``order`` so that the reported conflict follows
        the operation's precedence when both values are taken.
        """
        values = {"name": name, "email": email}
        try:
            for field in order:
                query = self.db.query(User.id).filter(getattr(User, field) == values[field])
                if exclude_id is not None:
                    query = query.filter(User.id != exclude_id)
                if query.first() is not None:
                    logger.info(f"Rejected duplicate {field}: {values[field]!r}")
                    return UserConflictError(field)
        except SQLAlchemyError as e:
            return self._storage_failure("Error checking for duplicate users", e)

        # Integrity error unrelated to name/email uniqueness
        return self._storage_failure("Error saving the user", error)

    def _storage_failure(self, action: str, error: Exception) -> UserServiceError:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
        logger.error(f"{action}: {error}")
        return UserServiceError(f"{action}. Details: {error}")
