"""Aggregate accessors — construct, mutate, save and load one aggregate.

An accessor holds at most one in-memory instance. Setters mutate it and
save() persists it; nothing is written until save() is called.
"""

import logging
from datetime import datetime

from domain.model.community import Community, validate_name
from domain.model.errors import (
    CommunityNotFoundError,
    InvalidIdentifierError,
    NotFoundError,
    UninitializedAggregateError,
    UserNotFoundError,
)
from domain.model.identifier import validate_ids
from domain.model.user import ExperiencePoint, PopulatedUser, User
from port.community_repository import CommunityRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AggregateAccessor:
    entity_name = 'Aggregate'
    not_found_error: type[NotFoundError] = NotFoundError

    def __init__(self, repo, instance=None):
        self.repo = repo
        self._instance = instance

    @property
    def instance(self):
        """The held aggregate. Raises UninitializedAggregateError if none."""
        if self._instance is None:
            raise UninitializedAggregateError(self.entity_name)
        return self._instance

    @property
    def is_loaded(self) -> bool:
        return self._instance is not None

    def save(self) -> str:
        """Persist the held aggregate and return its ID (assigned on first save)."""
        instance = self.instance
        instance.id = self.repo.save(instance)
        return instance.id

    def load_by_id(self, aggregate_id: str):
        """Load an aggregate, replacing any instance currently held.

        Raises InvalidIdentifierError before touching storage if the ID is malformed.
        """
        if not validate_ids([aggregate_id]):
            raise InvalidIdentifierError(f"Invalid {self.entity_name.lower()} ID")

        instance = self.repo.get_by_id(aggregate_id)
        if instance is None:
            raise self.not_found_error(f"{self.entity_name} not found for id:{aggregate_id}")

        self._instance = instance
        return instance


class UserAccessor(AggregateAccessor):
    entity_name = 'User'
    not_found_error = UserNotFoundError

    def __init__(self, repo: UserRepository, instance: User | None = None):
        super().__init__(repo, instance)

    @classmethod
    def construct(
        cls,
        repo: UserRepository,
        email: str,
        password_hash: str,
        profile_picture: str | None = None,
        experience_points: list[ExperiencePoint] | None = None,
        community_id: str | None = None,
    ) -> 'UserAccessor':
        """New unsaved user pre-populated with the given fields."""
        user = User(
            email=email,
            password_hash=password_hash,
            profile_picture=profile_picture,
            experience_points=list(experience_points or []),
            community_id=community_id,
        )
        return cls(repo, user)

    def set_email(self, email: str) -> None:
        self.instance.email = email

    def set_password_hash(self, password_hash: str) -> None:
        self.instance.password_hash = password_hash

    def set_profile_picture(self, profile_picture: str | None) -> None:
        self.instance.profile_picture = profile_picture

    def set_community(self, community_id: str | None) -> None:
        self.instance.community_id = community_id

    def add_experience(self, points: int, timestamp: datetime | None = None) -> ExperiencePoint:
        return self.instance.award(points, timestamp)

    def populate(self, communities: CommunityRepository) -> PopulatedUser:
        """Resolve the community reference for display."""
        user = self.instance
        community = communities.get_by_id(user.community_id) if user.community_id else None
        if user.community_id and community is None:
            logger.warning("User references missing community", extra={
                "userId": user.id,
                "communityId": user.community_id,
            })
        return PopulatedUser(user=user, community=community)


class CommunityAccessor(AggregateAccessor):
    entity_name = 'Community'
    not_found_error = CommunityNotFoundError

    def __init__(self, repo: CommunityRepository, instance: Community | None = None):
        super().__init__(repo, instance)

    @classmethod
    def construct(cls, repo: CommunityRepository, name: str, logo: str | None = None) -> 'CommunityAccessor':
        return cls(repo, Community.create(name=name, logo=logo))

    def set_name(self, name: str) -> None:
        community = self.instance
        validate_name(name)
        community.name = name.strip()

    def set_logo(self, logo: str | None) -> None:
        self.instance.logo = logo
