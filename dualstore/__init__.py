# ==============================================
# dualstore: File Storage Across Two Databases
# ==============================================
#
# Package Structure:
#
# dualstore/
# ├── analysis/       # JSON structure analysis → relational vs document
# ├── storage/        # Store selection, MySQL + MongoDB stores, file router
# ├── config.py       # Configuration management
# ├── errors.py       # ParseError, StoreError
# ├── file_types.py   # Extension / category lookup
# ├── merge.py        # JSON merge strategies
# ├── models.py       # FileDescriptor, FileMetadata, SearchParams, ...
# └── cli.py          # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from .analysis import StorageBackend, StructureAnalysis, analyze_structure, get_analysis_summary
from .models import FileDescriptor
from .storage.selector import select_store, select_store_for_batch

__all__ = [
    "StorageBackend",
    "StructureAnalysis",
    "analyze_structure",
    "get_analysis_summary",
    "FileDescriptor",
    "select_store",
    "select_store_for_batch",
]
