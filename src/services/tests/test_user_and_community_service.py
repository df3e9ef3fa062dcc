"""Unit tests for user_service and community_service."""

import unittest
from unittest.mock import patch
from datetime import datetime, timezone

import bcrypt

from adapter.fake.community_repository import FakeCommunityRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, InvalidIdentifierError, UserNotFoundError, ValidationError
from domain.model.identifier import new_id
from services.community_service import create_community
from services.user_service import award_points, create_user


@patch('services.user_service.BCRYPT_ROUNDS', 4)
class TestCreateUser(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_create_user_hashes_password(self):
        user = create_user(self.repo, 'ada@example.com', 'correct-horse', profile_picture='ada.png')

        stored = self.repo.get_by_id(user.id)
        self.assertEqual(stored.email, 'ada@example.com')
        self.assertEqual(stored.profile_picture, 'ada.png')
        self.assertNotEqual(stored.password_hash, 'correct-horse')
        self.assertTrue(bcrypt.checkpw(b'correct-horse', stored.password_hash.encode('utf-8')))
        self.assertEqual(stored.experience_points, [])
        self.assertIsNone(stored.community_id)

    def test_short_password_rejected(self):
        with self.assertRaises(ValidationError):
            create_user(self.repo, 'ada@example.com', 'short')
        self.assertEqual(self.repo.store, {})


class TestAwardPoints(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        with patch('services.user_service.BCRYPT_ROUNDS', 4):
            self.user = create_user(self.repo, 'ada@example.com', 'correct-horse')

    def test_award_points_accumulates(self):
        ts = datetime(2024, 3, 1, tzinfo=timezone.utc)
        award_points(self.repo, self.user.id, 10, ts)
        award_points(self.repo, self.user.id, 5)
        user = award_points(self.repo, self.user.id, 7)

        self.assertEqual(user.total_experience, 22)
        stored = self.repo.get_by_id(self.user.id)
        self.assertEqual([e.points for e in stored.experience_points], [10, 5, 7])
        self.assertEqual(stored.experience_points[0].timestamp, ts)

    def test_award_points_invalid_points(self):
        with self.assertRaises(ValidationError):
            award_points(self.repo, self.user.id, 2.5)
        self.assertEqual(self.repo.get_by_id(self.user.id).experience_points, [])

    def test_award_points_unknown_user(self):
        with self.assertRaises(UserNotFoundError):
            award_points(self.repo, new_id(), 10)

    def test_award_points_invalid_id(self):
        with self.assertRaises(InvalidIdentifierError):
            award_points(self.repo, 'nope', 10)


class TestCreateCommunity(unittest.TestCase):

    def setUp(self):
        self.repo = FakeCommunityRepository()

    def test_create_community(self):
        community = create_community(self.repo, 'Pythonistas', logo='py.png')
        self.assertIsNotNone(community.id)
        self.assertEqual(self.repo.get_by_id(community.id).logo, 'py.png')

    def test_duplicate_name_rejected(self):
        create_community(self.repo, 'Pythonistas')
        with self.assertRaises(DuplicateError):
            create_community(self.repo, 'Pythonistas')
        self.assertEqual(len(self.repo.store), 1)

    def test_name_too_long_rejected(self):
        with self.assertRaises(ValidationError):
            create_community(self.repo, 'x' * 51)


if __name__ == '__main__':
    unittest.main()
