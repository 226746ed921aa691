# ==============================================
# MongoStore
# ==============================================
#
# PURPOSE:
#   Document side of the split. Each FileMetadata becomes one
#   document in the `files` collection with its parsed content
#   kept as-is, however nested.
#
# CLASS: MongoStore(Store)
# ------------------------
#   Stateful: holds a pymongo client.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None)
#   - from_config(config: MongoConfig)  (classmethod)
#
#   Methods:
#   --------
#   - connect()         → ping, create indexes on extension/category/tags
#   - disconnect()
#   - save_file / get_file / search_files / update_file / delete_file
#   - count_files / count_by  → count_documents, $group on category | extension
#
#   Search: case-insensitive regex on both names and on
#   `content_text`, a JSON text copy of the metadata written on every
#   save and metadata update (a regex cannot reach into a nested
#   document). Tags match when any requested tag is present.
#
#   Every pymongo PyMongoError is re-raised as StoreError.
#
# ==============================================

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from dualstore.analysis.decision import StorageBackend
from dualstore.config import MongoConfig
from dualstore.errors import StoreError, StoreNotConnectedError
from dualstore.models import FileMetadata, SearchParams
from .base import Store, check_countable, filter_changes

COLLECTION_NAME = "files"


class MongoStore(Store):
    backend = StorageBackend.DOCUMENT

    def __init__(self, host, port, database, user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.client = None

    @classmethod
    def from_config(cls, config: MongoConfig) -> "MongoStore":
        return cls(
            host=config.host,
            port=config.port,
            database=config.database,
            user=config.user,
            password=config.password,
        )

    @property
    def uri(self) -> str:
        if self.user and self.password:
            return f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
        return f"mongodb://{self.host}:{self.port}/{self.database}"

    def connect(self) -> None:
        try:
            self.client = PyMongoClient(self.uri)
            # Test connection
            self.client.admin.command("ping")
            self._ensure_indexes()
            print("Connected to MongoDB successfully.")
        except ConnectionFailure as e:
            print(f"Could not connect to MongoDB: {e}")
            raise StoreError(f"MongoDB connection failed: {e}") from e
        except OperationFailure as e:
            print(f"Authentication failed: {e}")
            raise StoreError(f"MongoDB authentication failed: {e}") from e

    def disconnect(self) -> None:
        if self.client:
            self.client.close()
            print("Disconnected from MongoDB.")
            self.client = None

    def save_file(self, metadata: FileMetadata) -> str:
        document = metadata.to_dict()
        document.pop("id", None)
        document["content_text"] = _content_text(metadata.metadata)
        now = datetime.now(timezone.utc)
        document["uploaded_at"] = document["uploaded_at"] or now
        document["updated_at"] = now
        try:
            result = self._collection().insert_one(document)
        except PyMongoError as e:
            raise StoreError(f"MongoDB insert failed: {e}") from e
        file_id = str(result.inserted_id)
        print(f"Inserted file '{metadata.original_name}' with id {file_id} into '{COLLECTION_NAME}'.")
        return file_id

    def get_file(self, file_id: str) -> Optional[FileMetadata]:
        object_id = self._object_id(file_id)
        if object_id is None:
            return None
        try:
            document = self._collection().find_one({"_id": object_id})
        except PyMongoError as e:
            raise StoreError(f"MongoDB query failed: {e}") from e
        return FileMetadata.from_dict(document) if document else None

    def search_files(self, params: SearchParams) -> List[FileMetadata]:
        query = self._build_query(params)
        try:
            cursor = (
                self._collection()
                .find(query)
                .sort("uploaded_at", DESCENDING)
                .skip(params.offset)
                .limit(params.limit)
            )
            return [FileMetadata.from_dict(document) for document in cursor]
        except PyMongoError as e:
            raise StoreError(f"MongoDB query failed: {e}") from e

    def update_file(self, file_id: str, changes: Dict[str, Any]) -> Optional[FileMetadata]:
        changes = filter_changes(changes)
        object_id = self._object_id(file_id)
        if object_id is None:
            return None
        if changes:
            update = dict(changes)
            update["updated_at"] = datetime.now(timezone.utc)
            if "metadata" in update:
                update["content_text"] = _content_text(update["metadata"])
            try:
                self._collection().update_one({"_id": object_id}, {"$set": update})
            except PyMongoError as e:
                raise StoreError(f"MongoDB update failed: {e}") from e
        return self.get_file(file_id)

    def delete_file(self, file_id: str) -> bool:
        object_id = self._object_id(file_id)
        if object_id is None:
            return False
        try:
            result = self._collection().delete_one({"_id": object_id})
        except PyMongoError as e:
            raise StoreError(f"MongoDB delete failed: {e}") from e
        return result.deleted_count > 0

    def count_files(self) -> int:
        try:
            return self._collection().count_documents({})
        except PyMongoError as e:
            raise StoreError(f"MongoDB count failed: {e}") from e

    def count_by(self, field: str) -> Dict[str, int]:
        pipeline = [{"$group": {"_id": f"${check_countable(field)}", "count": {"$sum": 1}}}]
        try:
            groups = list(self._collection().aggregate(pipeline))
        except PyMongoError as e:
            raise StoreError(f"MongoDB aggregate failed: {e}") from e
        return {group["_id"]: group["count"] for group in groups}

    # ======================================
    # Internal helpers
    # ======================================
    @staticmethod
    def _build_query(params: SearchParams) -> Dict[str, Any]:
        """Translate SearchParams into a MongoDB filter document."""
        query: Dict[str, Any] = {}
        if params.query:
            pattern = {"$regex": re.escape(params.query), "$options": "i"}
            query["$or"] = [
                {"filename": pattern},
                {"original_name": pattern},
                {"content_text": pattern},
            ]
        if params.category:
            query["category"] = params.category
        if params.extension:
            query["extension"] = params.extension.lower()
        if params.tags:
            query["tags"] = {"$in": list(params.tags)}
        return query

    def _collection(self):
        if not self.client:
            raise StoreNotConnectedError("Not connected to MongoDB.")
        return self.client[self.database][COLLECTION_NAME]

    def _ensure_indexes(self) -> None:
        collection = self._collection()
        collection.create_index("extension")
        collection.create_index("category")
        collection.create_index("tags")

    @staticmethod
    def _object_id(file_id: str) -> Optional[ObjectId]:
        try:
            return ObjectId(file_id)
        except (InvalidId, TypeError):
            return None


def _content_text(metadata: Any) -> str:
    return json.dumps(metadata, default=str)
