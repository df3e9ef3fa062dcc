"""Membership service — join and leave a community.

A user is either unaffiliated or a member of exactly one community.
Switching communities means leave() followed by join().
All preconditions are checked before anything is written.
"""

import logging

from domain.model.errors import InvalidIdentifierError
from domain.model.identifier import validate_ids
from domain.model.user import User
from port.community_repository import CommunityRepository
from port.user_repository import UserRepository
from services.accessor import CommunityAccessor, UserAccessor

logger = logging.getLogger(__name__)


def join_community(
    users: UserRepository,
    communities: CommunityRepository,
    user_id: str,
    community_id: str,
) -> User:
    """Add an unaffiliated user to a community.

    Raises:
        InvalidIdentifierError: either ID is malformed
        UserNotFoundError: no user with user_id
        AlreadyInCommunityError: user is already a member somewhere
        CommunityNotFoundError: no community with community_id
    """
    if not validate_ids([user_id, community_id]):
        raise InvalidIdentifierError("Invalid user or community ID")

    user = UserAccessor(users)
    user.load_by_id(user_id)
    user.instance.check_can_join()

    community = CommunityAccessor(communities)
    community.load_by_id(community_id)

    user.set_community(community.instance.id)
    user.save()

    logger.info("User joined community", extra={"userId": user_id, "communityId": community_id})
    return user.instance


def leave_community(users: UserRepository, user_id: str) -> User:
    """Remove a user from their community.

    Raises:
        InvalidIdentifierError: user_id is malformed
        UserNotFoundError: no user with user_id
        NotInCommunityError: user has no community
    """
    if not validate_ids([user_id]):
        raise InvalidIdentifierError("Invalid user ID")

    user = UserAccessor(users)
    user.load_by_id(user_id)
    user.instance.check_can_leave()

    previous = user.instance.community_id
    user.set_community(None)
    user.save()

    logger.info("User left community", extra={"userId": user_id, "communityId": previous})
    return user.instance
