# ==============================================
# Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   Plain records passed between the selector, the file router
#   and the two stores.
#
# CLASSES:
# --------
# - FileDescriptor (dataclass)
#     What the Storage Selector looks at for one file.
#     filename, size_bytes, mime_type, content (parsed JSON or None)
#
# - FileMetadata (dataclass)
#     The record persisted for an uploaded file, in whichever store
#     was selected. Carries storage_type and the optional analysis
#     audit trail (StructureAnalysis.to_dict()).
#
# - SearchParams (dataclass)
#     Filters for listing files: free-text query (names + content),
#     any-of tags, category, extension, limit/offset.
#
# - PendingUpload (dataclass)
#     Raw bytes + name + MIME type + tags of one uploaded file.
#
# - UploadResult (dataclass)
#     Outcome of routing one upload.
#
# - StorageStats (dataclass)
#     total / by_category / by_extension counts for a store;
#     combine() adds two of them.
#
# ==============================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class FileDescriptor:
    """Input to the Storage Selector for a single file."""
    filename: str
    size_bytes: int = 0
    mime_type: str = ""
    content: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileDescriptor":
        """
        Build a descriptor from a mapping.

        Accepts snake_case keys as well as the camelCase keys used by
        the upload form ("sizeBytes" / "size", "mimeType").
        """
        size = data.get("size_bytes", data.get("sizeBytes", data.get("size", 0)))
        return cls(
            filename=data["filename"],
            size_bytes=int(size or 0),
            mime_type=data.get("mime_type", data.get("mimeType", "")) or "",
            content=data.get("content"),
        )


@dataclass
class FileMetadata:
    """Metadata record for one stored file."""

    # --- Identity ---
    filename: str  # Name on disk (unique, generated at upload time)
    original_name: str  # Name as uploaded by the user
    file_path: str  # Public path, e.g. "/uploads/<filename>"

    # --- File characteristics ---
    file_size: int = 0
    mime_type: str = ""
    extension: str = ""
    category: str = "Other"
    tags: List[str] = field(default_factory=list)
    metadata: Any = field(default_factory=dict)  # Parsed JSON content for data files

    # --- Routing ---
    storage_type: Optional[str] = None  # "relational" or "document"
    analysis: Optional[Dict[str, Any]] = None  # StructureAnalysis.to_dict() when analysed

    # --- Assigned by the store ---
    id: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the metadata for storage or JSON output.

        Returns:
            A dictionary; datetimes are left as datetime objects
        """
        return {
            "id": self.id,
            "filename": self.filename,
            "original_name": self.original_name,
            "file_path": self.file_path,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "extension": self.extension,
            "category": self.category,
            "tags": list(self.tags),
            "metadata": self.metadata,
            "storage_type": self.storage_type,
            "analysis": self.analysis,
            "uploaded_at": self.uploaded_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileMetadata":
        """
        Reconstruct FileMetadata from a stored row or document.

        Args:
            data: Dictionary as returned by a store

        Returns:
            A FileMetadata instance
        """
        raw_id = data.get("id", data.get("_id"))
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            filename=data["filename"],
            original_name=data.get("original_name", data["filename"]),
            file_path=data.get("file_path", ""),
            file_size=data.get("file_size", 0),
            mime_type=data.get("mime_type", ""),
            extension=data.get("extension", ""),
            category=data.get("category", "Other"),
            tags=list(data.get("tags") or []),
            metadata=data.get("metadata") if data.get("metadata") is not None else {},
            storage_type=data.get("storage_type"),
            analysis=data.get("analysis"),
            uploaded_at=data.get("uploaded_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class SearchParams:
    """Filters for listing stored files."""
    query: Optional[str] = None  # Matched against file names and the JSON content text
    tags: List[str] = field(default_factory=list)  # Any one of these tags matches
    category: Optional[str] = None
    extension: Optional[str] = None
    limit: int = 50
    offset: int = 0


@dataclass
class PendingUpload:
    """One file of a (possibly multi-file) upload, before routing."""
    original_name: str
    data: bytes
    mime_type: str = "application/octet-stream"
    tags: List[str] = field(default_factory=list)


@dataclass
class UploadResult:
    """Outcome of routing a single upload to a store."""
    success: bool
    file: Optional[FileMetadata] = None
    storage_type: Optional[str] = None
    error: Optional[str] = None


@dataclass
class StorageStats:
    """File counts for one store, or for both stores combined."""
    total: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)
    by_extension: Dict[str, int] = field(default_factory=dict)

    def combine(self, other: "StorageStats") -> "StorageStats":
        """Add two sets of counts key by key."""
        def _add(left: Dict[str, int], right: Dict[str, int]) -> Dict[str, int]:
            merged = dict(left)
            for key, count in right.items():
                merged[key] = merged.get(key, 0) + count
            return merged

        return StorageStats(
            total=self.total + other.total,
            by_category=_add(self.by_category, other.by_category),
            by_extension=_add(self.by_extension, other.by_extension),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_category": dict(self.by_category),
            "by_extension": dict(self.by_extension),
        }
