"""
MongoDB Connection Utility

MongoDB stores:
- Uploaded study material files (GridFS buckets fs.files / fs.chunks)
- One-time upload targets handed out before a file transfer

WHY MongoDB for these?
- GridFS streams arbitrary binary files of any size
- Upload targets are short-lived documents with a TTL
- Relational metadata (title, subject, counts) stays in PostgreSQL
"""
import logging

import gridfs
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from portal.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal_files database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    db = get_mongo_db()
    return db[name]


def get_gridfs() -> gridfs.GridFS:
    return gridfs.GridFS(get_mongo_db())


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
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "upload_targets": "upload_targets",
}


def init_mongo_indexes():
    """
    Create indexes for upload targets.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["upload_targets"]].create_index("token", unique=True)
    # Expired targets are removed by MongoDB's TTL monitor
    db[COLLECTIONS["upload_targets"]].create_index("expires_at", expireAfterSeconds=0)

    logger.info("MongoDB indexes created")
