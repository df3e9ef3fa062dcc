"""Process-wide MongoDB client.

One MongoClient (and its connection pool) is shared by every request. It is
created lazily, re-created if a cached client stops answering pings, and
closed by the application lifespan on shutdown.
"""

import os
import logging
from urllib.parse import urlsplit

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL', 'mongodb://localhost:27017')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'leaderboard')
MAX_POOL_SIZE = int(os.getenv('MONGODB_MAX_POOL_SIZE', '10'))
TIMEOUT_MS = int(os.getenv('MONGODB_TIMEOUT_MS', '5000'))

_client: MongoClient | None = None
_ever_connected = False
_config_failed = False


def client_options() -> dict:
    """Keyword arguments for MongoClient."""
    return {
        'serverSelectionTimeoutMS': TIMEOUT_MS,
        'connectTimeoutMS': TIMEOUT_MS,
        'socketTimeoutMS': TIMEOUT_MS * 6,
        'maxPoolSize': MAX_POOL_SIZE,
        'minPoolSize': 0,
        'waitQueueTimeoutMS': TIMEOUT_MS * 2,
        'retryWrites': True,
        'retryReads': True,
        # Experience timestamps are read back as aware UTC datetimes
        'tz_aware': True,
    }


def _redacted(url: str) -> str:
    """Host part of a connection string, without credentials."""
    parts = urlsplit(url)
    return parts.hostname or url.split('@')[-1]


def reset_client() -> None:
    """Forget the cached client and any earlier failure, without closing it."""
    global _client, _ever_connected, _config_failed
    _client = None
    _ever_connected = False
    _config_failed = False


def close_client() -> None:
    """Close the cached client. Called at application shutdown."""
    global _client
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None


def get_mongodb_client() -> MongoClient | None:
    """Return the shared client, connecting on first use.

    A cached client that fails its ping is dropped and a new one is tried.
    If the very first connection fails the configuration is assumed to be
    wrong and no further attempts are made until reset_client().

    Returns:
        MongoClient, or None when MongoDB is unreachable
    """
    global _client, _ever_connected, _config_failed

    if _client is not None:
        try:
            _client.admin.command('ping')
            return _client
        except PyMongoError:
            logger.debug("Cached MongoDB client failed ping, reconnecting")
            _client = None

    if _config_failed:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL not configured")
        _config_failed = True
        return None

    try:
        client = MongoClient(MONGO_URL, **client_options())
        client.admin.command('ping')
    except PyMongoError as e:
        if not _ever_connected:
            logger.error("Initial MongoDB connection failed", extra={
                "host": _redacted(MONGO_URL),
                "error": str(e)[:200],
            })
            _config_failed = True
        return None

    if not _ever_connected:
        logger.info("Connected to MongoDB", extra={"host": _redacted(MONGO_URL), "database": DATABASE_NAME})
    _ever_connected = True
    _client = client
    return client


def get_database() -> Database | None:
    """The application database on the shared client, or None when unreachable."""
    client = get_mongodb_client()
    if client is None:
        return None
    return client[DATABASE_NAME]
