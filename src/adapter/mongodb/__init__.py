"""MongoDB adapters for users and communities."""

USERS_COLLECTION_NAME = 'users'
COMMUNITIES_COLLECTION_NAME = 'communities'
