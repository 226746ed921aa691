# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - uniform_rows       → array of objects sharing one key-set
# - divergent_rows     → five objects, no shared keys
# - optional_field_rows → ten rows, two of them missing one optional field
# - relational_store / document_store → in-memory FakeStore instances
# - router             → FileRouter wired to the two fakes
#
# NOTES:
# ------
# - No test here needs a running MySQL or MongoDB; the real
#   stores are exercised against unittest.mock connections.
# ==============================================

import json

import pytest

from dualstore.analysis.decision import StorageBackend
from dualstore.errors import StoreError
from dualstore.models import FileMetadata, SearchParams
from dualstore.storage.base import Store, check_countable, filter_changes
from dualstore.storage.file_router import FileRouter


class FakeStore(Store):
    """In-memory Store used to test the router without a database."""

    def __init__(self, backend: StorageBackend, fail: bool = False):
        self.backend = backend
        self.fail = fail
        self.files = {}
        self.connected = False
        self._next_id = 1

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def save_file(self, metadata: FileMetadata) -> str:
        if self.fail:
            raise StoreError(f"{self.backend.value} store unavailable")
        file_id = str(self._next_id)
        self._next_id += 1
        stored = FileMetadata.from_dict({**metadata.to_dict(), "id": file_id})
        self.files[file_id] = stored
        return file_id

    def get_file(self, file_id):
        return self.files.get(file_id)

    def search_files(self, params: SearchParams):
        results = []
        for stored in self.files.values():
            if params.query and not self._mentions(stored, params.query):
                continue
            if params.category and stored.category != params.category:
                continue
            if params.extension and stored.extension != params.extension:
                continue
            if params.tags and not set(params.tags) & set(stored.tags):
                continue
            results.append(stored)
        return results[params.offset:params.offset + params.limit]

    def update_file(self, file_id, changes):
        changes = filter_changes(changes)
        stored = self.files.get(file_id)
        if stored is None:
            return None
        for key, value in changes.items():
            setattr(stored, key, value)
        return stored

    def delete_file(self, file_id):
        return self.files.pop(file_id, None) is not None

    def count_files(self):
        if self.fail:
            raise StoreError(f"{self.backend.value} store unavailable")
        return len(self.files)

    def count_by(self, field):
        counts = {}
        for stored in self.files.values():
            key = getattr(stored, check_countable(field))
            counts[key] = counts.get(key, 0) + 1
        return counts

    @staticmethod
    def _mentions(stored, query):
        text = " ".join([stored.filename, stored.original_name, json.dumps(stored.metadata)])
        return query.lower() in text.lower()


@pytest.fixture
def uniform_rows():
    """Identical keys in every element."""
    return [
        {"a": 1, "b": "x"},
        {"a": 2, "b": "y"},
        {"a": 3, "b": "z"},
    ]


@pytest.fixture
def divergent_rows():
    """Five elements, five different single-key schemas."""
    return [{"a": 1}, {"b": 2}, {"c": 3}, {"d": 4}, {"e": 5}]


@pytest.fixture
def optional_field_rows():
    """
    Ten rows with five core fields and two optional ones.

    Row 0 lacks "nickname", row 1 lacks "phone", the other eight
    have both: three schemas, 80% consistency.
    """
    rows = []
    for i in range(10):
        row = {
            "id": i,
            "name": f"user{i}",
            "email": f"user{i}@example.com",
            "age": 20 + i,
            "active": i % 2 == 0,
            "nickname": f"u{i}",
            "phone": f"555-010{i}",
        }
        if i == 0:
            del row["nickname"]
        if i == 1:
            del row["phone"]
        rows.append(row)
    return rows


@pytest.fixture
def relational_store():
    return FakeStore(StorageBackend.RELATIONAL)


@pytest.fixture
def document_store():
    return FakeStore(StorageBackend.DOCUMENT)


@pytest.fixture
def router(relational_store, document_store):
    return FileRouter(relational_store, document_store)
