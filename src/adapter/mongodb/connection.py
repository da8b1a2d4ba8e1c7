"""Process-wide MongoDB client for the time tracking store.

The client is created lazily on first use and cached. A cached client that
stops answering pings is replaced; a store that was never reachable (missing
or wrong MONGO_URL) is not retried until ``reset_client()``.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'timetracker')

USERS_COLLECTION_NAME = 'users'
PROJECTS_COLLECTION_NAME = 'projects'
TIME_ENTRIES_COLLECTION_NAME = 'time_entries'
COUNTERS_COLLECTION_NAME = 'counters'

_CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'retryWrites': True,
    'retryReads': True,
    # stored dates come back as UTC-aware datetimes, comparable with request bounds
    'tz_aware': True,
}

_client: MongoClient | None = None
_ever_connected = False
_unreachable = False


def reset_client():
    """Forget the cached client and any earlier connection failure."""
    global _client, _ever_connected, _unreachable
    _client = None
    _ever_connected = False
    _unreachable = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def _warn_without_replica_set(client: MongoClient) -> None:
    """Project deletion runs in a transaction, which standalone servers reject."""
    try:
        hello = client.admin.command('hello')
    except PyMongoError:
        return
    if not hello.get('setName') and hello.get('msg') != 'isdbgrid':
        logger.warning("MongoDB is not a replica set; project deletes will fail", extra={
            "database": DATABASE_NAME,
        })


def get_mongodb_client() -> MongoClient | None:
    """Return the shared client, connecting on first use.

    Returns:
        A client that answered a ping, or None if MongoDB is unavailable
    """
    global _client, _ever_connected, _unreachable

    if _client is not None:
        if _is_alive(_client):
            return _client
        logger.debug("Cached MongoDB client failed ping, reconnecting")
        _client = None

    if _unreachable:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL is not set; STORAGE_BACKEND=mongodb needs it")
        _unreachable = True
        return None

    try:
        client = MongoClient(MONGO_URL, **_CLIENT_OPTIONS)
    except PyMongoError as e:
        logger.error("Invalid MONGO_URL", extra={"error": str(e)[:200]})
        _unreachable = True
        return None

    if not _is_alive(client):
        if not _ever_connected:
            logger.error("Initial MongoDB connection failed", extra={"database": DATABASE_NAME})
            _unreachable = True
        return None

    if not _ever_connected:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
        _warn_without_replica_set(client)
    _ever_connected = True
    _client = client
    return client
