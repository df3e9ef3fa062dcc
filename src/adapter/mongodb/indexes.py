"""MongoDB index management for the users and communities collections."""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing any existing index that clashes with it.

    A clash is an index with the same name but different keys, or the same
    keys under a different name. The clashing index is dropped and the
    requested one created in its place.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    conflicting = _find_conflicting_index(collection, keys, name)
    if conflicting is None:
        logger.error("Failed to resolve index conflict", extra={"index": name, "collection": collection.name})
        return False

    logger.warning("Dropping conflicting index", extra={"index": conflicting, "collection": collection.name})
    collection.drop_index(conflicting)
    collection.create_index(keys, name=name, **kwargs)
    logger.info("Recreated index", extra={"index": name, "collection": collection.name})
    return True


def _find_conflicting_index(collection, keys: list, name: str) -> str | None:
    wanted = dict(keys)
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted
        if same_name != same_keys:
            return idx_name
    return None


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.community_repository import MongoCommunityRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoCommunityRepository(db).ensure_indexes(),
    ]
    return all(results)
