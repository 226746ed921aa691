# ==============================================
# Store (abstract capability)
# ==============================================
#
# PURPOSE:
#   The one thing the file router needs from a backend: persist
#   and look up FileMetadata records. MySQLStore and MongoStore
#   implement it; tests use in-memory fakes.
#
# Stores are constructed from config and handed to the router,
# which never reaches for a global connection.
#
# CLASS: Store (ABC)
# ------------------
#   - backend: StorageBackend          → which side of the split this is
#   - connect() / disconnect()
#   - save_file(metadata) -> str       → returns the assigned id
#   - get_file(file_id) -> FileMetadata | None
#   - search_files(params) -> list[FileMetadata]
#   - update_file(file_id, changes) -> FileMetadata | None
#       changes may hold original_name, tags, metadata
#   - delete_file(file_id) -> bool
#   - count_files() -> int
#   - count_by(field) -> dict          → field is "category" or "extension"
#   - stats() -> StorageStats          → built from the two counters above
#   - __enter__ / __exit__ for `with store:` usage
#
# ==============================================

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from dualstore.analysis.decision import StorageBackend
from dualstore.models import FileMetadata, SearchParams, StorageStats

# Fields a caller may change after upload (rename, retag, edit content)
UPDATABLE_FIELDS = ("original_name", "tags", "metadata")

# Fields the stats can be grouped by
COUNTABLE_FIELDS = ("category", "extension")


class Store(ABC):
    backend: StorageBackend

    @abstractmethod
    def connect(self) -> None:
        ...

    @abstractmethod
    def disconnect(self) -> None:
        ...

    @abstractmethod
    def save_file(self, metadata: FileMetadata) -> str:
        ...

    @abstractmethod
    def get_file(self, file_id: str) -> Optional[FileMetadata]:
        ...

    @abstractmethod
    def search_files(self, params: SearchParams) -> List[FileMetadata]:
        ...

    @abstractmethod
    def update_file(self, file_id: str, changes: Dict[str, Any]) -> Optional[FileMetadata]:
        ...

    @abstractmethod
    def delete_file(self, file_id: str) -> bool:
        ...

    @abstractmethod
    def count_files(self) -> int:
        ...

    @abstractmethod
    def count_by(self, field: str) -> Dict[str, int]:
        ...

    def stats(self) -> StorageStats:
        return StorageStats(
            total=self.count_files(),
            by_category=self.count_by("category"),
            by_extension=self.count_by("extension"),
        )

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()


def filter_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the fields that may be updated; reject anything else."""
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    return dict(changes)


def check_countable(field: str) -> str:
    """Only whitelisted column names ever reach a GROUP BY."""
    if field not in COUNTABLE_FIELDS:
        raise ValueError(f"Cannot count by field: {field}")
    return field
