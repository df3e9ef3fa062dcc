"""MongoDB implementation of UserRepository."""

from logging import getLogger

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import StorageError
from domain.model.identifier import is_valid_id
from domain.model.user import ExperiencePoint, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('community', 1)], 'idx_users_community')
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── mapping ───────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        community = doc.get('community')
        return User(
            id=str(doc['_id']),
            email=doc['email'],
            password_hash=doc.get('passwordHash', ''),
            profile_picture=doc.get('profilePicture'),
            experience_points=[
                ExperiencePoint(points=entry['points'], timestamp=entry['timestamp'])
                for entry in doc.get('experiencePoints') or []
            ],
            community_id=str(community) if community else None,
        )

    def _to_document(self, user: User) -> dict:
        return {
            'email': user.email,
            'passwordHash': user.password_hash,
            'profilePicture': user.profile_picture,
            'experiencePoints': [
                {'points': entry.points, 'timestamp': entry.timestamp}
                for entry in user.experience_points
            ],
            'community': ObjectId(user.community_id) if user.community_id else None,
        }

    # ── CRUD ──────────────────────────────────────────────────

    def save(self, user: User) -> str:
        """Insert a new user or fully replace an existing one. Return the user ID."""
        doc = self._to_document(user)
        try:
            if user.id is None:
                result = self.collection.insert_one(doc)
                user_id = str(result.inserted_id)
                logger.info("User created", extra={"userId": user_id})
                return user_id

            self.collection.replace_one({'_id': ObjectId(user.id)}, doc, upsert=True)
            logger.debug("User saved", extra={"userId": user.id, "communityId": user.community_id})
            return user.id
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            raise StorageError("Failed to save user") from e

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        if not is_valid_id(user_id):
            return None
        try:
            doc = self.collection.find_one({'_id': ObjectId(user_id)})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to load user") from e
