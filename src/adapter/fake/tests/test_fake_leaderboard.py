"""Unit tests for FakeLeaderboardQuery — the in-memory reference for the MongoDB pipelines."""

import unittest
from datetime import datetime, timezone

from adapter.fake.community_repository import FakeCommunityRepository
from adapter.fake.leaderboard import FakeLeaderboardQuery
from adapter.fake.user_repository import FakeUserRepository
from domain.model.community import Community
from domain.model.user import ExperiencePoint, User

TS = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestFakeLeaderboardQuery(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.communities = FakeCommunityRepository()
        self.query = FakeLeaderboardQuery(self.users, self.communities)

        self.a = self.communities.save(Community(name='A', logo='a.png'))
        self.b = self.communities.save(Community(name='B'))
        self.c = self.communities.save(Community(name='C'))

    def _user(self, email: str, points: list[int], community_id: str | None = None) -> str:
        return self.users.save(User(
            email=email,
            password_hash='hash',
            experience_points=[ExperiencePoint(p, TS) for p in points],
            community_id=community_id,
        ))

    def test_rank_communities(self):
        self._user('a1@example.com', [4, 6], self.a)
        self._user('a2@example.com', [20], self.a)
        self._user('b1@example.com', [5], self.b)
        self._user('loner@example.com', [100])

        rankings = self.query.rank_communities()

        self.assertEqual(
            [(r.name, r.total_points, r.user_count) for r in rankings],
            [('A', 30, 2), ('B', 5, 1)],
        )
        self.assertEqual(rankings[0].community_id, self.a)
        self.assertEqual(rankings[0].logo, 'a.png')
        self.assertNotIn(self.c, [r.community_id for r in rankings])

    def test_member_without_points_counts_as_member(self):
        self._user('a1@example.com', [], self.a)
        rankings = self.query.rank_communities()
        self.assertEqual([(r.total_points, r.user_count) for r in rankings], [(0, 1)])

    def test_ties_ordered_by_community_id(self):
        self._user('b1@example.com', [10], self.b)
        self._user('a1@example.com', [10], self.a)

        rankings = self.query.rank_communities()

        self.assertEqual([r.community_id for r in rankings], sorted([self.a, self.b]))

    def test_users_with_points(self):
        u1 = self._user('a1@example.com', [10, 5, 7], self.a)
        u2 = self._user('loner@example.com', [])

        result = {u.id: u for u in self.query.users_with_points()}

        self.assertEqual(set(result), {u1, u2})
        self.assertEqual(result[u1].total_experience, 22)
        self.assertEqual(result[u1].community.name, 'A')
        self.assertEqual(result[u2].total_experience, 0)
        self.assertIsNone(result[u2].community)

    def test_queries_are_idempotent(self):
        self._user('a1@example.com', [10], self.a)
        self._user('b1@example.com', [3], self.b)

        self.assertEqual(self.query.rank_communities(), self.query.rank_communities())
        self.assertEqual(self.query.users_with_points(), self.query.users_with_points())


if __name__ == '__main__':
    unittest.main()
