"""In-memory implementation of CommunityRepository for testing."""

import copy

from domain.model.community import Community
from domain.model.errors import DuplicateError
from domain.model.identifier import new_id


class FakeCommunityRepository:
    def __init__(self):
        self.store: dict[str, Community] = {}

    def save(self, community: Community) -> str:
        if any(c.name == community.name and c.id != community.id for c in self.store.values()):
            raise DuplicateError(f"Community name already exists: {community.name}")

        community_id = community.id or new_id()
        stored = copy.deepcopy(community)
        stored.id = community_id
        self.store[community_id] = stored
        return community_id

    def get_by_id(self, community_id: str) -> Community | None:
        community = self.store.get(community_id)
        return copy.deepcopy(community) if community else None

    def list_all(self) -> list[Community]:
        return [copy.deepcopy(c) for c in self.store.values()]
