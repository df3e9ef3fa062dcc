from typing import Protocol

from domain.model.community import Community


class CommunityRepository(Protocol):
    """Protocol defining the interface for community data access.

    Implementations raise StorageError on backend failures.
    """
    def save(self, community: Community) -> str:
        """Insert or replace a community. Return its ID.

        Raises DuplicateError if another community already has the same name.
        """
        ...

    def get_by_id(self, community_id: str) -> Community | None:
        """Find a community by ID. Return Community or None if not found."""
        ...

    def list_all(self) -> list[Community]:
        """Return every stored community."""
        ...
