# ==============================================
# MySQLStore
# ==============================================
#
# PURPOSE:
#   Relational side of the split. Stores FileMetadata rows in a
#   fixed `files` table; JSON content, tags and the analysis audit
#   trail go into JSON columns.
#
# CLASS: MySQLStore(Store)
# ------------------------
#   Stateful: holds one pymysql connection.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database)
#       Store connection params. Don't connect yet.
#   - from_config(config: MySQLConfig)  (classmethod)
#
#   Methods:
#   --------
#   - connect()        → create database + files table if missing
#   - disconnect()
#   - save_file / get_file / search_files / update_file / delete_file
#   - count_files / count_by  → COUNT(*), GROUP BY category | extension
#
#   Search: LIKE on both names and on the metadata JSON text;
#   tags match when any requested tag is present.
#
#   Every pymysql.MySQLError is re-raised as StoreError.
#
# ==============================================

import json
from typing import Any, Dict, List, Optional, Tuple

import pymysql
import pymysql.cursors

from dualstore.analysis.decision import StorageBackend
from dualstore.config import MySQLConfig
from dualstore.errors import StoreError, StoreNotConnectedError
from dualstore.models import FileMetadata, SearchParams
from .base import Store, check_countable, filter_changes

TABLE_NAME = "files"

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id BIGINT AUTO_INCREMENT PRIMARY KEY,
    filename VARCHAR(255) NOT NULL,
    original_name VARCHAR(255) NOT NULL,
    file_path VARCHAR(500) NOT NULL,
    file_size BIGINT NOT NULL,
    mime_type VARCHAR(100) NOT NULL,
    extension VARCHAR(50) NOT NULL,
    category VARCHAR(50) NOT NULL,
    tags JSON,
    metadata JSON,
    storage_type VARCHAR(20),
    analysis JSON,
    uploaded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
    INDEX idx_files_extension (extension),
    INDEX idx_files_category (category)
)
"""

# Columns written on insert, in order
INSERT_COLUMNS = (
    "filename", "original_name", "file_path", "file_size", "mime_type",
    "extension", "category", "tags", "metadata", "storage_type", "analysis",
)
JSON_COLUMNS = ("tags", "metadata", "analysis")


class MySQLStore(Store):
    backend = StorageBackend.RELATIONAL

    def __init__(self, host, port, user, password, database):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    @classmethod
    def from_config(cls, config: MySQLConfig) -> "MySQLStore":
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
        )

    def connect(self) -> None:
        # Establish connection to MySQL, create database and table if they don't exist
        try:
            self.connection = pymysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                cursorclass=pymysql.cursors.DictCursor,
            )
            with self.connection.cursor() as cursor:
                cursor.execute(f"CREATE DATABASE IF NOT EXISTS {self.database}")
                cursor.execute(f"USE {self.database}")
                cursor.execute(CREATE_TABLE_SQL)
            self.connection.commit()
            print("Connected to MySQL successfully.")
        except pymysql.MySQLError as e:
            print(f"Could not connect to MySQL: {e}")
            raise StoreError(f"MySQL connection failed: {e}") from e

    def disconnect(self) -> None:
        # Close connection cleanly
        if self.connection:
            self.connection.close()
            self.connection = None
            print("Disconnected from MySQL.")

    def save_file(self, metadata: FileMetadata) -> str:
        row = metadata.to_dict()
        values = tuple(self._encode(column, row[column]) for column in INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(INSERT_COLUMNS))
        query = (
            f"INSERT INTO {TABLE_NAME} ({', '.join(INSERT_COLUMNS)}) "
            f"VALUES ({placeholders})"
        )
        with self._cursor() as cursor:
            cursor.execute(query, values)
            file_id = str(cursor.lastrowid)
        self._commit()
        print(f"Inserted file '{metadata.original_name}' with id {file_id} into '{TABLE_NAME}'.")
        return file_id

    def get_file(self, file_id: str) -> Optional[FileMetadata]:
        with self._cursor() as cursor:
            cursor.execute(f"SELECT * FROM {TABLE_NAME} WHERE id = %s", (file_id,))
            row = cursor.fetchone()
        return self._decode(row) if row else None

    def search_files(self, params: SearchParams) -> List[FileMetadata]:
        where, values = self._build_where(params)
        query = f"SELECT * FROM {TABLE_NAME}"
        if where:
            query += " WHERE " + " AND ".join(where)
        query += " ORDER BY uploaded_at DESC LIMIT %s OFFSET %s"
        values.extend([params.limit, params.offset])

        with self._cursor() as cursor:
            cursor.execute(query, tuple(values))
            rows = cursor.fetchall()
        return [self._decode(row) for row in rows]

    def update_file(self, file_id: str, changes: Dict[str, Any]) -> Optional[FileMetadata]:
        changes = filter_changes(changes)
        if changes:
            set_clause = ", ".join(f"{column} = %s" for column in changes)
            values = tuple(self._encode(column, value) for column, value in changes.items())
            with self._cursor() as cursor:
                cursor.execute(
                    f"UPDATE {TABLE_NAME} SET {set_clause} WHERE id = %s",
                    values + (file_id,),
                )
            self._commit()
        return self.get_file(file_id)

    def delete_file(self, file_id: str) -> bool:
        with self._cursor() as cursor:
            cursor.execute(f"DELETE FROM {TABLE_NAME} WHERE id = %s", (file_id,))
            deleted = cursor.rowcount > 0
        self._commit()
        return deleted

    def count_files(self) -> int:
        with self._cursor() as cursor:
            cursor.execute(f"SELECT COUNT(*) AS count FROM {TABLE_NAME}")
            row = cursor.fetchone()
        return int(row["count"]) if row else 0

    def count_by(self, field: str) -> Dict[str, int]:
        column = check_countable(field)
        with self._cursor() as cursor:
            cursor.execute(
                f"SELECT {column}, COUNT(*) AS count FROM {TABLE_NAME} GROUP BY {column}"
            )
            rows = cursor.fetchall()
        return {row[column]: int(row["count"]) for row in rows}

    # ======================================
    # Internal helpers
    # ======================================
    def _build_where(self, params: SearchParams) -> Tuple[List[str], List[Any]]:
        """Translate SearchParams into WHERE fragments and their values."""
        where: List[str] = []
        values: List[Any] = []
        if params.query:
            # JSON content is searched through its text form
            where.append(
                "(filename LIKE %s OR original_name LIKE %s OR CAST(metadata AS CHAR) LIKE %s)"
            )
            pattern = f"%{params.query}%"
            values.extend([pattern, pattern, pattern])
        if params.category:
            where.append("category = %s")
            values.append(params.category)
        if params.extension:
            where.append("extension = %s")
            values.append(params.extension.lower())
        if params.tags:
            # Any one of the tags matches
            where.append(
                "(" + " OR ".join(["JSON_CONTAINS(tags, %s)"] * len(params.tags)) + ")"
            )
            values.extend(json.dumps(tag) for tag in params.tags)
        return where, values

    def _cursor(self):
        if self.connection is None:
            raise StoreNotConnectedError("Not connected to MySQL.")
        return _WrappedCursor(self.connection.cursor())

    def _commit(self) -> None:
        try:
            self.connection.commit()
        except pymysql.MySQLError as e:
            self.connection.rollback()
            raise StoreError(f"MySQL commit failed: {e}") from e

    @staticmethod
    def _encode(column: str, value: Any) -> Any:
        if column in JSON_COLUMNS:
            return json.dumps(value) if value is not None else None
        return value

    @staticmethod
    def _decode(row: Dict[str, Any]) -> FileMetadata:
        row = dict(row)
        for column in JSON_COLUMNS:
            if isinstance(row.get(column), (str, bytes)):
                row[column] = json.loads(row[column])
        return FileMetadata.from_dict(row)


class _WrappedCursor:
    """Cursor context manager that turns driver errors into StoreError."""

    def __init__(self, cursor):
        self._cursor = cursor

    def __enter__(self):
        return self._cursor

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._cursor.close()
        if exc_type is not None and issubclass(exc_type, pymysql.MySQLError):
            raise StoreError(f"MySQL query failed: {exc_val}") from exc_val
        return False
