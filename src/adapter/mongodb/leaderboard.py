"""MongoDB aggregation pipelines for experience read models.

Both pipelines run against the users collection and join communities
with $lookup. Users without experience entries are kept with a total of 0.
"""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import COMMUNITIES_COLLECTION_NAME, USERS_COLLECTION_NAME
from domain.model.community import Community
from domain.model.errors import StorageError
from domain.model.leaderboard import CommunityRanking, UserWithPoints

logger = getLogger(__name__)

_UNWIND_EXPERIENCE = {
    '$unwind': {'path': '$experiencePoints', 'preserveNullAndEmptyArrays': True},
}

RANK_COMMUNITIES_PIPELINE = [
    {'$match': {'community': {'$ne': None}}},
    _UNWIND_EXPERIENCE,
    {
        '$group': {
            '_id': '$_id',
            'totalExperience': {'$sum': '$experiencePoints.points'},
            'community': {'$first': '$community'},
        },
    },
    {
        '$group': {
            '_id': '$community',
            'totalPoints': {'$sum': '$totalExperience'},
            'userCount': {'$sum': 1},
        },
    },
    {
        '$lookup': {
            'from': COMMUNITIES_COLLECTION_NAME,
            'localField': '_id',
            'foreignField': '_id',
            'as': 'communityDetails',
        },
    },
    # Inner join: groups whose community no longer exists are dropped
    {'$unwind': {'path': '$communityDetails'}},
    {
        '$project': {
            '_id': 0,
            'communityId': '$communityDetails._id',
            'totalPoints': 1,
            'logo': '$communityDetails.logo',
            'name': '$communityDetails.name',
            'userCount': 1,
        },
    },
    {'$sort': {'totalPoints': -1, 'communityId': 1}},
]

USERS_WITH_POINTS_PIPELINE = [
    _UNWIND_EXPERIENCE,
    {
        '$group': {
            '_id': '$_id',
            'email': {'$first': '$email'},
            'profilePicture': {'$first': '$profilePicture'},
            'community': {'$first': '$community'},
            'totalExperience': {'$sum': '$experiencePoints.points'},
        },
    },
    {
        '$lookup': {
            'from': COMMUNITIES_COLLECTION_NAME,
            'localField': 'community',
            'foreignField': '_id',
            'as': 'communityDetails',
        },
    },
    {
        '$project': {
            '_id': 1,
            'email': 1,
            'profilePicture': 1,
            'community': {'$arrayElemAt': ['$communityDetails', 0]},
            'totalExperience': 1,
        },
    },
]


class MongoLeaderboardQuery:
    def __init__(self, db: Database):
        self.users = db[USERS_COLLECTION_NAME]

    def rank_communities(self) -> list[CommunityRanking]:
        try:
            rankings = [
                CommunityRanking(
                    community_id=str(doc['communityId']),
                    name=doc['name'],
                    total_points=doc.get('totalPoints', 0),
                    user_count=doc.get('userCount', 0),
                    logo=doc.get('logo'),
                )
                for doc in self.users.aggregate(RANK_COMMUNITIES_PIPELINE)
            ]
        except PyMongoError as e:
            logger.error("Failed to rank communities", extra={"error": str(e)})
            raise StorageError("Failed to rank communities") from e

        logger.debug("Communities ranked", extra={"communityCount": len(rankings)})
        return rankings

    def users_with_points(self) -> list[UserWithPoints]:
        try:
            return [self._user_with_points(doc) for doc in self.users.aggregate(USERS_WITH_POINTS_PIPELINE)]
        except PyMongoError as e:
            logger.error("Failed to retrieve users with points", extra={"error": str(e)})
            raise StorageError("Failed to retrieve users with points") from e

    @staticmethod
    def _user_with_points(doc: dict) -> UserWithPoints:
        community_doc = doc.get('community')
        community = None
        if community_doc:
            community = Community(
                id=str(community_doc['_id']),
                name=community_doc['name'],
                logo=community_doc.get('logo'),
            )
        return UserWithPoints(
            id=str(doc['_id']),
            email=doc['email'],
            total_experience=doc.get('totalExperience', 0),
            profile_picture=doc.get('profilePicture'),
            community=community,
        )
