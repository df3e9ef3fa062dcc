from fastapi import HTTPException

from adapter.mongodb.community_repository import MongoCommunityRepository
from adapter.mongodb.connection import get_database
from adapter.mongodb.leaderboard import MongoLeaderboardQuery
from adapter.mongodb.user_repository import MongoUserRepository
from port.community_repository import CommunityRepository
from port.leaderboard import LeaderboardPort
from port.user_repository import UserRepository


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    db = get_database()
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_community_repo() -> CommunityRepository:
    return MongoCommunityRepository(_get_db())


def get_leaderboard() -> LeaderboardPort:
    return MongoLeaderboardQuery(_get_db())
