# ==============================================
# Storage Selector
# ==============================================
#
# PURPOSE:
#   Decide which store a file's metadata goes to. JSON files with
#   parsed content get the full structure analysis; everything else
#   is routed on size, MIME type and file category.
#
# FUNCTIONS:
# ----------
# - select_store(file, log_analysis=False) -> StorageBackend
#       Rules in order, first match wins:
#
#       RULE 1: JSON FILE WITH CONTENT → analyze_structure()
#       RULE 2: JSON MIME TYPE AND > 1 MB → DOCUMENT
#       RULE 3: CONTENT NESTED DEEPER THAN 3 → DOCUMENT
#       RULE 4: "Data" CATEGORY (json/xml/yaml/sql) → DOCUMENT
#       RULE 5: MEDIA (Images/Videos/Audio) → RELATIONAL
#       RULE 6: EVERYTHING ELSE → RELATIONAL
#
# - explain_store(file, large_json_bytes=...) -> (StorageBackend, StructureAnalysis | None)
#       Same rules; also hands back the analysis when rule 1 ran,
#       so callers can keep it as an audit trail.
#
# - select_store_for_batch(files) -> StorageBackend
#       More than half "Data" → DOCUMENT
#       All one media category → RELATIONAL
#       Otherwise → RELATIONAL
#
# Both functions are pure and safe to call from any thread.
# ==============================================

from typing import Any, Dict, Iterable, Optional, Tuple, Union

from dualstore.analysis import analyze_structure, calculate_depth, get_analysis_summary
from dualstore.analysis.decision import StorageBackend, StructureAnalysis
from dualstore.analysis.value_kind import ValueKind
from dualstore.config import LARGE_JSON_BYTES
from dualstore.file_types import (
    DATA_CATEGORY,
    MEDIA_CATEGORIES,
    get_file_category,
    get_file_extension,
)
from dualstore.models import FileDescriptor

JSON_EXTENSIONS = frozenset({"json"})
MAX_METADATA_DEPTH = 3

FileLike = Union[FileDescriptor, Dict[str, Any]]


def _as_descriptor(file: FileLike) -> FileDescriptor:
    if isinstance(file, FileDescriptor):
        return file
    return FileDescriptor.from_dict(file)


def select_store(
    file: FileLike,
    log_analysis: bool = False,
    large_json_bytes: int = LARGE_JSON_BYTES,
) -> StorageBackend:
    """
    Choose the store for one file.

    Args:
        file: FileDescriptor, or a mapping with filename / size_bytes /
              mime_type and optional content
        log_analysis: Print the structure analysis summary for JSON files
        large_json_bytes: Size above which a JSON payload goes to the document store

    Returns:
        StorageBackend.RELATIONAL or StorageBackend.DOCUMENT
    """
    backend, analysis = explain_store(file, large_json_bytes=large_json_bytes)
    if log_analysis and analysis is not None:
        print("\n" + get_analysis_summary(analysis))
    return backend


def explain_store(
    file: FileLike,
    large_json_bytes: int = LARGE_JSON_BYTES,
) -> Tuple[StorageBackend, Optional[StructureAnalysis]]:
    """Apply the selection rules; the analysis is None unless rule 1 ran."""
    descriptor = _as_descriptor(file)
    extension = get_file_extension(descriptor.filename)
    category = get_file_category(extension)
    content = descriptor.content

    # RULE 1: JSON FILE WITH CONTENT
    if extension in JSON_EXTENSIONS and content is not None:
        analysis = analyze_structure(content)
        return analysis.recommended_storage, analysis

    # RULE 2: LARGE JSON PAYLOAD
    if "json" in descriptor.mime_type.lower() and descriptor.size_bytes > large_json_bytes:
        return StorageBackend.DOCUMENT, None

    # RULE 3: DEEPLY NESTED METADATA
    if ValueKind.is_container(content) and calculate_depth(content) > MAX_METADATA_DEPTH:
        return StorageBackend.DOCUMENT, None

    # RULE 4: DATA FILES
    if category == DATA_CATEGORY:
        return StorageBackend.DOCUMENT, None

    # RULE 5: BINARY MEDIA (metadata kept transactional)
    if category in MEDIA_CATEGORIES:
        return StorageBackend.RELATIONAL, None

    # RULE 6: DEFAULT
    return StorageBackend.RELATIONAL, None


def select_store_for_batch(files: Iterable[FileLike]) -> StorageBackend:
    """
    Choose one store for a multi-file upload.

    Args:
        files: Descriptors or mappings; only filename is consulted

    Returns:
        StorageBackend.DOCUMENT when more than half are data files,
        otherwise StorageBackend.RELATIONAL
    """
    categories = [
        get_file_category(get_file_extension(_as_descriptor(f).filename))
        for f in files
    ]

    data_files = sum(1 for category in categories if category == DATA_CATEGORY)
    if data_files > len(categories) / 2:
        return StorageBackend.DOCUMENT

    unique_categories = set(categories)
    if len(unique_categories) == 1 and unique_categories <= MEDIA_CATEGORIES:
        return StorageBackend.RELATIONAL

    # Mixed batches
    return StorageBackend.RELATIONAL
