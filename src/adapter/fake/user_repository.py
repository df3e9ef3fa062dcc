"""In-memory implementation of UserRepository for testing."""

import copy

from domain.model.identifier import new_id
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    def save(self, user: User) -> str:
        user_id = user.id or new_id()
        stored = copy.deepcopy(user)
        stored.id = user_id
        self.store[user_id] = stored
        return user_id

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        # copies, so unsaved mutations never leak into the store
        return copy.deepcopy(user) if user else None
