"""
MongoDB Connection Utility

MongoDB stores:
- colleges: one document per college, with reviews, events,
  research papers and sports facilities embedded as arrays
- students: registered students, referencing a college by name

The client is created once per process and shared by every request;
pymongo pools connections internally and is thread-safe.
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.server_api import ServerApi

from collegeez.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None
_email_index_ready = False


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = get_settings()
        timeout = settings.mongo_timeout_ms
        _client = MongoClient(
            settings.mongo_url,
            server_api=ServerApi("1"),
            serverSelectionTimeoutMS=timeout,
            connectTimeoutMS=timeout,
            socketTimeoutMS=timeout,
        )
    return _client


def get_mongo_db() -> Database:
    """Get the CollegeEZNow database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use:
    - colleges: college documents with embedded arrays
    - students: registered students
    """
    db = get_mongo_db()
    return db[name]


def close_mongo_client() -> None:
    """Close the shared client. The next call reconnects."""
    global _client, _db, _email_index_ready
    if _client is not None:
        _client.close()
    _client = None
    _db = None
    _email_index_ready = False


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "colleges": "colleges",
    "students": "students",
}


def ensure_email_index(collection: Collection) -> bool:
    """
    Create the unique index on students.email if it is not there yet.

    Safe to call on every registration: once the index exists this is a
    no-op. Returns False while existing duplicate emails block the index;
    other store errors propagate.
    """
    global _email_index_ready
    if _email_index_ready:
        return True
    try:
        collection.create_index("email", unique=True)
    except DuplicateKeyError as e:
        logger.error(f"Unique email index not created, students has duplicate emails: {e}")
        return False
    _email_index_ready = True
    return True


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Unique email makes registration an atomic insert-or-fail
    ensure_email_index(db[COLLECTIONS["students"]])

    # Student -> college logo lookup matches on name
    db[COLLECTIONS["colleges"]].create_index([("collegeName", ASCENDING)])

    # Newest-first listings
    db[COLLECTIONS["colleges"]].create_index([("createdAt", DESCENDING)])

    logger.info("MongoDB indexes created successfully")
