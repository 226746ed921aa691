# ==============================================
# FileRouter
# ==============================================
#
# PURPOSE:
#   Takes uploaded files, decides which store each one belongs in
#   (Storage Selector) and writes its metadata there. Also serves
#   the follow-up operations on stored files: lookup, search across
#   both stores, rename, retag, merge, delete and file counts.
#
# WHY THIS CLASS EXISTS:
#   The selector is pure; something has to parse the bytes, build
#   the FileMetadata record, keep the analysis as an audit trail and
#   talk to the right store. Both stores are injected, so the router
#   owns no connections.
#
# CLASS: FileRouter
# -----------------
#   Constructor:
#   ------------
#   - __init__(relational: Store, document: Store, config: StorageConfig = None)
#
#   Methods:
#   --------
#   - route_upload(upload: PendingUpload, stored_name=None) -> UploadResult
#         1. Derive extension + category
#         2. Parse JSON content for .json files (ParseError → empty metadata)
#         3. explain_store() → backend (+ analysis)
#         4. Build FileMetadata, save in the chosen store
#   - route_batch(uploads) -> list[UploadResult]
#   - store_for(backend) -> Store
#   - get_file / search_files / rename_file / update_tags / delete_file
#   - merge_files(first_id, first_backend, second_id, second_backend, strategy)
#   - stats() -> {"relational", "document", "combined": StorageStats}
#         a store that fails to count is reported as empty
#
# FUNCTIONS:
# ----------
# - parse_json_bytes(data, filename=None) -> Any   (raises ParseError)
# - create_stores(config) -> (MySQLStore, MongoStore)
#
# ==============================================

import json
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from dualstore.analysis.decision import StorageBackend
from dualstore.config import AppConfig, StorageConfig, get_config
from dualstore.errors import ParseError, StoreError
from dualstore.file_types import get_file_category, get_file_extension
from dualstore.merge import merge_json
from dualstore.models import (
    FileDescriptor,
    FileMetadata,
    PendingUpload,
    SearchParams,
    StorageStats,
    UploadResult,
)
from .base import Store
from .mongo_store import MongoStore
from .mysql_store import MySQLStore
from .selector import JSON_EXTENSIONS, explain_store

BackendLike = Union[StorageBackend, str]


def parse_json_bytes(data: bytes, filename: str = None) -> Any:
    """
    Decode UTF-8 bytes and parse them as JSON.

    Raises:
        ParseError: bytes are not UTF-8 or not valid JSON
    """
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Invalid JSON in {filename or 'upload'}: {e}", filename) from e


def create_stores(config: Optional[AppConfig] = None) -> Tuple[MySQLStore, MongoStore]:
    """Build (not connect) both stores from configuration."""
    config = config or get_config()
    return MySQLStore.from_config(config.mysql), MongoStore.from_config(config.mongo)


def generate_stored_name(extension: str) -> str:
    """Unique on-disk name: <millis>-<random>.<ext>"""
    stem = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"
    return f"{stem}.{extension}" if extension else stem


class FileRouter:
    def __init__(self, relational: Store, document: Store, config: StorageConfig = None):
        self.relational = relational
        self.document = document
        self.config = config or StorageConfig()

    def store_for(self, backend: BackendLike) -> Store:
        backend = StorageBackend(backend)
        if backend is StorageBackend.DOCUMENT:
            return self.document
        return self.relational

    def public_path(self, filename: str) -> str:
        """Path a stored file is served under, e.g. /uploads/<filename>"""
        return f"/{self.config.upload_dir.strip('/')}/{filename}"

    # ======================================
    # Upload routing
    # ======================================
    def route_upload(self, upload: PendingUpload, stored_name: str = None) -> UploadResult:
        """
        Route one uploaded file to a store and persist its metadata.

        Args:
            upload: The raw upload
            stored_name: On-disk name; generated when omitted

        Returns:
            UploadResult; success=False with an error message when the
            store rejected the record
        """
        extension = get_file_extension(upload.original_name)
        filename = stored_name or generate_stored_name(extension)

        content = None
        if extension in JSON_EXTENSIONS:
            try:
                content = parse_json_bytes(upload.data, upload.original_name)
            except ParseError as e:
                # Still stored, just without analysable content
                print(f"⚠ {e}")
                content = {}

        backend, analysis = explain_store(
            FileDescriptor(
                filename=upload.original_name,
                size_bytes=len(upload.data),
                mime_type=upload.mime_type,
                content=content,
            ),
            large_json_bytes=self.config.large_json_bytes,
        )

        metadata = FileMetadata(
            filename=filename,
            original_name=upload.original_name,
            file_path=self.public_path(filename),
            file_size=len(upload.data),
            mime_type=upload.mime_type,
            extension=extension,
            category=get_file_category(extension),
            tags=[tag.strip() for tag in upload.tags if tag.strip()],
            metadata=content if content is not None else {},
            storage_type=backend.value,
            analysis=analysis.to_dict() if analysis is not None else None,
        )

        try:
            metadata.id = self.store_for(backend).save_file(metadata)
        except StoreError as e:
            print(f"✗ Upload of '{upload.original_name}' failed: {e}")
            return UploadResult(success=False, storage_type=backend.value, error=str(e))

        print(f"✓ Stored '{upload.original_name}' in {backend.value} store (id={metadata.id})")
        return UploadResult(success=True, file=metadata, storage_type=backend.value)

    def route_batch(self, uploads: Iterable[PendingUpload]) -> List[UploadResult]:
        """Route every file of a multi-file upload independently."""
        return [self.route_upload(upload) for upload in uploads]

    # ======================================
    # Follow-up operations
    # ======================================
    def get_file(self, file_id: str, backend: BackendLike) -> Optional[FileMetadata]:
        return self.store_for(backend).get_file(file_id)

    def search_files(self, params: SearchParams = None, backend: BackendLike = None) -> List[FileMetadata]:
        """
        Search one store, or both when no backend is given.

        Results from both stores are merged newest first and the
        limit is applied to the merged list.
        """
        params = params or SearchParams()
        if backend is not None:
            return self.store_for(backend).search_files(params)

        results = self.relational.search_files(params) + self.document.search_files(params)
        results.sort(key=lambda f: (f.uploaded_at is not None, f.uploaded_at), reverse=True)
        return results[:params.limit]

    def rename_file(self, file_id: str, backend: BackendLike, new_name: str) -> Optional[FileMetadata]:
        new_name = new_name.strip()
        if not new_name:
            raise ValueError("New name must not be empty")
        return self.store_for(backend).update_file(file_id, {"original_name": new_name})

    def update_tags(self, file_id: str, backend: BackendLike, tags: List[str]) -> Optional[FileMetadata]:
        cleaned = [tag.strip() for tag in tags if tag.strip()]
        return self.store_for(backend).update_file(file_id, {"tags": cleaned})

    def delete_file(self, file_id: str, backend: BackendLike) -> bool:
        return self.store_for(backend).delete_file(file_id)

    def merge_files(
        self,
        first_id: str,
        first_backend: BackendLike,
        second_id: str,
        second_backend: BackendLike,
        strategy,
    ) -> FileMetadata:
        """
        Merge the second JSON file's content into the first one.

        Raises:
            LookupError: either file does not exist
            ValueError: either file is not JSON, or the strategy is invalid
        """
        first = self.get_file(first_id, first_backend)
        second = self.get_file(second_id, second_backend)
        if first is None or second is None:
            raise LookupError("One or both files not found")
        if first.extension not in JSON_EXTENSIONS or second.extension not in JSON_EXTENSIONS:
            raise ValueError("Both files must be JSON files")

        merged = merge_json(first.metadata, second.metadata, strategy)
        updated = self.store_for(first_backend).update_file(first_id, {"metadata": merged})
        print(f"✓ Merged '{second.original_name}' into '{first.original_name}' ({strategy})")
        return updated

    # ======================================
    # Statistics
    # ======================================
    def stats(self) -> Dict[str, StorageStats]:
        """
        File counts per store and for both stores together.

        Returns:
            {"relational": ..., "document": ..., "combined": ...}
        """
        per_store = {}
        for store in (self.relational, self.document):
            try:
                per_store[store.backend.value] = store.stats()
            except StoreError as e:
                print(f"✗ Could not count files in {store.backend.value} store: {e}")
                per_store[store.backend.value] = StorageStats()

        per_store["combined"] = per_store["relational"].combine(per_store["document"])
        return per_store
