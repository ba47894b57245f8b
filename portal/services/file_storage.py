"""
File Storage Service - two-step upload handshake.

1. create_upload_target()  -> one-time token + URL to send bytes to
2. store(token, bytes)     -> consumes the token, returns a storage id
3. the storage id is saved with the material metadata
4. get_url(storage_id)     -> where clients download the file from

MongoFileStorage keeps targets in the upload_targets collection and the
file bytes in GridFS.
"""

import secrets
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from gridfs.errors import NoFile

from portal.core.config import get_settings
from portal.core.errors import NotFoundError
from portal.db.mongodb import get_collection, get_gridfs, COLLECTIONS

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    storage_id: str
    filename: str
    content_type: str
    data: bytes


class FileStorage(ABC):
    """Interface the material routes talk to."""

    def __init__(self, base_url: str = None, token_ttl_minutes: int = None):
        settings = get_settings()
        self.base_url = (base_url or settings.public_base_url).rstrip("/")
        self.token_ttl = timedelta(minutes=token_ttl_minutes or settings.upload_token_ttl_minutes)

    def _new_token(self) -> str:
        return secrets.token_urlsafe(24)

    def upload_url(self, token: str) -> str:
        return f"{self.base_url}/api/materials/upload/{token}"

    def get_url(self, storage_id: Optional[str]) -> Optional[str]:
        """Download URL for a storage id, or None if the file is gone."""
        if not storage_id or not self.exists(storage_id):
            return None
        return f"{self.base_url}/api/files/{storage_id}"

    @abstractmethod
    def create_upload_target(self, user_id: int) -> str:
        """Issue a one-time upload token for this user."""

    @abstractmethod
    def store(self, token: str, data: bytes, filename: str, content_type: str) -> str:
        """Consume the token and save bytes. Raises NotFoundError for a bad token."""

    @abstractmethod
    def exists(self, storage_id: str) -> bool:
        ...

    @abstractmethod
    def open(self, storage_id: str) -> StoredFile:
        """Raises NotFoundError when nothing is stored under the id."""


class MongoFileStorage(FileStorage):

    def __init__(self, base_url: str = None, token_ttl_minutes: int = None):
        super().__init__(base_url, token_ttl_minutes)
        self.targets = get_collection(COLLECTIONS["upload_targets"])
        self.fs = get_gridfs()

    def create_upload_target(self, user_id: int) -> str:
        token = self._new_token()
        self.targets.insert_one({
            "token": token,
            "user_id": user_id,
            "used": False,
            "created_at": datetime.now(timezone.utc),
            "expires_at": datetime.now(timezone.utc) + self.token_ttl
        })
        return token

    def store(self, token: str, data: bytes, filename: str, content_type: str) -> str:
        # Atomically claim the token so it can only be used once
        target = self.targets.find_one_and_update(
            {"token": token, "used": False, "expires_at": {"$gt": datetime.now(timezone.utc)}},
            {"$set": {"used": True, "used_at": datetime.now(timezone.utc)}}
        )
        if not target:
            raise NotFoundError("Upload target not found or already used")

        file_id = self.fs.put(
            data,
            filename=filename,
            metadata={"content_type": content_type, "uploaded_by": target["user_id"]}
        )
        logger.info("Stored %s (%d bytes) as %s", filename, len(data), file_id)
        return str(file_id)

    def _object_id(self, storage_id: str) -> Optional[ObjectId]:
        try:
            return ObjectId(storage_id)
        except (InvalidId, TypeError):
            return None

    def exists(self, storage_id: str) -> bool:
        oid = self._object_id(storage_id)
        return oid is not None and self.fs.exists(oid)

    def open(self, storage_id: str) -> StoredFile:
        oid = self._object_id(storage_id)
        if oid is None:
            raise NotFoundError("File not found")
        try:
            grid_out = self.fs.get(oid)
        except NoFile:
            raise NotFoundError("File not found")
        return StoredFile(
            storage_id=storage_id,
            filename=grid_out.filename,
            content_type=(grid_out.metadata or {}).get("content_type") or "application/octet-stream",
            data=grid_out.read()
        )
