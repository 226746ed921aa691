# ==============================================
# STORAGE: SELECTION + RELATIONAL / DOCUMENT STORES
# ==============================================
#
# This package picks a store for each uploaded file and talks to
# the two backends.
#
# Modules:
# --------
# - selector.py      → select_store / select_store_for_batch (pure)
# - base.py          → Store interface
# - mysql_store.py   → Relational store (MySQL)
# - mongo_store.py   → Document store (MongoDB)
# - file_router.py   → Parse upload → select store → persist metadata
#
# ==============================================

from .selector import explain_store, select_store, select_store_for_batch
from .base import Store
from .mysql_store import MySQLStore
from .mongo_store import MongoStore
from .file_router import FileRouter, create_stores, parse_json_bytes

__all__ = [
    "explain_store",
    "select_store",
    "select_store_for_batch",
    "Store",
    "MySQLStore",
    "MongoStore",
    "FileRouter",
    "create_stores",
    "parse_json_bytes",
]
