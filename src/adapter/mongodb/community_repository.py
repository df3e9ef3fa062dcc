"""MongoDB implementation of CommunityRepository."""

from logging import getLogger

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import COMMUNITIES_COLLECTION_NAME
from domain.model.community import Community
from domain.model.errors import DuplicateError, StorageError
from domain.model.identifier import is_valid_id

logger = getLogger(__name__)


class MongoCommunityRepository:
    def __init__(self, db: Database):
        self.collection = db[COMMUNITIES_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for communities collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('name', 1)], 'idx_communities_name', unique=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to create communities indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Community:
        return Community(id=str(doc['_id']), name=doc['name'], logo=doc.get('logo'))

    def save(self, community: Community) -> str:
        doc = {'name': community.name, 'logo': community.logo}
        try:
            if community.id is None:
                result = self.collection.insert_one(doc)
                community_id = str(result.inserted_id)
                logger.info("Community created", extra={"communityId": community_id, "communityName": community.name})
                return community_id

            self.collection.replace_one({'_id': ObjectId(community.id)}, doc, upsert=True)
            logger.debug("Community saved", extra={"communityId": community.id})
            return community.id
        except DuplicateKeyError as e:
            logger.warning("Community save failed: name already exists", extra={"communityName": community.name})
            raise DuplicateError(f"Community name already exists: {community.name}") from e
        except PyMongoError as e:
            logger.error("Failed to save community", extra={"communityId": community.id, "error": str(e)})
            raise StorageError("Failed to save community") from e

    def get_by_id(self, community_id: str) -> Community | None:
        if not is_valid_id(community_id):
            return None
        try:
            doc = self.collection.find_one({'_id': ObjectId(community_id)})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get community by ID", extra={"communityId": community_id, "error": str(e)})
            raise StorageError("Failed to load community") from e

    def list_all(self) -> list[Community]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find({})]
        except PyMongoError as e:
            logger.error("Failed to list communities", extra={"error": str(e)})
            raise StorageError("Failed to list communities") from e
