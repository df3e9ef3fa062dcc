from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise StorageError on backend failures.
    """
    def save(self, user: User) -> str:
        """Insert the user if it has no ID, otherwise replace it. Return the user ID."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...
