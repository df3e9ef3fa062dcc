"""In-memory implementation of LeaderboardPort for testing.

Computes the same read models as the MongoDB pipelines from the stores
of the fake repositories.
"""

import copy

from adapter.fake.community_repository import FakeCommunityRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.leaderboard import CommunityRanking, UserWithPoints


class FakeLeaderboardQuery:
    def __init__(self, users: FakeUserRepository, communities: FakeCommunityRepository):
        self.users = users
        self.communities = communities

    def rank_communities(self) -> list[CommunityRanking]:
        # Group per-user totals by community
        totals: dict[str, dict] = {}
        for user in self.users.store.values():
            if not user.community_id:
                continue
            group = totals.setdefault(user.community_id, {'points': 0, 'users': 0})
            group['points'] += user.total_experience
            group['users'] += 1

        result = []
        for community_id, group in totals.items():
            community = self.communities.store.get(community_id)
            if community is None:
                continue
            result.append(CommunityRanking(
                community_id=community_id,
                name=community.name,
                total_points=group['points'],
                user_count=group['users'],
                logo=community.logo,
            ))

        # Sort by points desc, then community ID asc
        result.sort(key=lambda r: (-r.total_points, r.community_id))
        return result

    def users_with_points(self) -> list[UserWithPoints]:
        result = []
        for user in self.users.store.values():
            community = self.communities.store.get(user.community_id) if user.community_id else None
            result.append(UserWithPoints(
                id=user.id,
                email=user.email,
                total_experience=user.total_experience,
                profile_picture=user.profile_picture,
                community=copy.deepcopy(community),
            ))
        return result
