"""Community service — community creation."""

import logging

from domain.model.community import Community
from port.community_repository import CommunityRepository
from services.accessor import CommunityAccessor

logger = logging.getLogger(__name__)


def create_community(repo: CommunityRepository, name: str, logo: str | None = None) -> Community:
    """Create and save a community.

    Raises:
        ValidationError: name is empty or too long
        DuplicateError: name already taken
    """
    community = CommunityAccessor.construct(repo, name=name, logo=logo)
    community.save()
    logger.info("Community registered", extra={"communityId": community.instance.id, "communityName": community.instance.name})
    return community.instance
