"""User store with an in-memory implementation."""

import logging
import threading
from abc import ABC, abstractmethod

from user_common.models.user import User, UserPayload

logger = logging.getLogger(__name__)


def seed_users() -> list[User]:
    """Records every fresh store starts with."""
    return [
        User(id=1, name="Alice", email="alice@example.com"),
        User(id=2, name="Bob", email="bob@example.com"),
        User(id=3, name="Charlie", email="charlie@example.com"),
    ]


class UserStore(ABC):
    """Abstract interface for user storage."""

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users in insertion order."""

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""

    @abstractmethod
    def create_user(self, candidate: UserPayload) -> User:
        """Store a new user and assign its ID."""

    @abstractmethod
    def update_user(self, user_id: int, candidate: UserPayload) -> User | None:
        """Replace the name and email of an existing user."""

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        """Delete a user."""


class InMemoryUserStore(UserStore):
    """List-backed implementation of UserStore.

    Every operation is a linear scan under a single lock. Stored records
    never leave the store; callers always receive copies.
    """

    def __init__(self, users: list[User] | None = None) -> None:
        """Initialize the store.

        Args:
            users: Initial records, defaults to the seed users
        """
        self._users: list[User] = [user.model_copy() for user in (seed_users() if users is None else users)]
        self._lock = threading.Lock()

    def _find(self, user_id: int) -> User | None:
        return next((user for user in self._users if user.id == user_id), None)

    def _next_id(self) -> int:
        return max((user.id for user in self._users), default=0) + 1

    def list_users(self) -> list[User]:
        """List all users in insertion order."""
        with self._lock:
            return [user.model_copy() for user in self._users]

    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""
        with self._lock:
            user = self._find(user_id)
            return user.model_copy() if user else None

    def create_user(self, candidate: UserPayload) -> User:
        """Store a new user and assign its ID.

        Args:
            candidate: Validated name and email

        Returns:
            The stored user with its assigned ID
        """
        with self._lock:
            user = User(id=self._next_id(), name=candidate.name, email=candidate.email)
            self._users.append(user)
        logger.info("Created user %s", user.id)
        return user.model_copy()

    def update_user(self, user_id: int, candidate: UserPayload) -> User | None:
        """Replace the name and email of an existing user.

        Args:
            user_id: ID of the user to update
            candidate: Validated name and email

        Returns:
            The updated user, or None if no user has that ID
        """
        with self._lock:
            user = self._find(user_id)
            if user is None:
                return None
            user.name = candidate.name
            user.email = candidate.email
            updated = user.model_copy()
        logger.info("Updated user %s", user_id)
        return updated

    def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                return False
            self._users.remove(user)
        logger.info("Deleted user %s", user_id)
        return True
