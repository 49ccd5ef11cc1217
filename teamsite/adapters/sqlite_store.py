"""
SQLite Document Store (P1 Implementation).

Stores each document as a JSON blob keyed by (collection, id). Equality
filters and ordering use SQLite's JSON1 `json_extract`, so the store keeps
the same contract as a managed document database without a schema per
collection.
"""

import json
import re
import sqlite3
from typing import Any
from uuid import uuid4

from teamsite.core.ports.db import (
    DocumentExistsError,
    DocumentNotFoundError,
    Query,
    StoreError,
)

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    data TEXT NOT NULL,
    PRIMARY KEY (collection, id)
)
"""


def _json_path(field_name: str) -> str:
    if not _FIELD_NAME.match(field_name):
        raise StoreError(f"Invalid field name: {field_name!r}")
    return f"$.{field_name}"


class SQLiteDocumentStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._ensure_schema()

    def _get_conn(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open document store: {e}") from e

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Schema setup failed: {e}") from e
        finally:
            conn.close()

    def create(
        self,
        collection: str,
        doc: dict[str, Any],
        *,
        doc_id: str | None = None,
    ) -> str:
        new_id = doc_id or uuid4().hex
        body = {k: v for k, v in doc.items() if k != "id"}
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO documents (collection, id, data) VALUES (?, ?, ?)",
                (collection, new_id, json.dumps(body)),
            )
            conn.commit()
            return new_id
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise DocumentExistsError(collection, new_id) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Create failed in {collection}: {e}") from e
        finally:
            conn.close()

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Read failed in {collection}: {e}") from e
        finally:
            conn.close()
        if not row:
            return None
        return {"id": doc_id, **json.loads(row[0])}

    def query(self, collection: str, query: Query | None = None) -> list[dict[str, Any]]:
        query = query or Query()
        sql = "SELECT id, data FROM documents WHERE collection = ?"
        params: list[Any] = [collection]

        for field_name, value in query.where.items():
            path = _json_path(field_name)
            if value is None:
                sql += " AND json_extract(data, ?) IS NULL"
                params.append(path)
            elif isinstance(value, (str, int, float, bool)):
                sql += " AND json_extract(data, ?) = ?"
                params.extend([path, value])
            else:
                raise StoreError(f"Unsupported filter value for '{field_name}'")

        if query.order_by:
            path = _json_path(query.order_by)
            direction = "DESC" if query.direction == "desc" else "ASC"
            # Documents lacking the field go last in both directions
            sql += (
                f" ORDER BY json_extract(data, ?) IS NULL, json_extract(data, ?) {direction}"
            )
            params.extend([path, path])

        conn = self._get_conn()
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Query failed in {collection}: {e}") from e
        finally:
            conn.close()
        return [{"id": row[0], **json.loads(row[1])} for row in rows]

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            if not row:
                raise DocumentNotFoundError(collection, doc_id)

            merged = json.loads(row[0])
            merged.update({k: v for k, v in partial.items() if k != "id"})
            conn.execute(
                "UPDATE documents SET data = ? WHERE collection = ? AND id = ?",
                (json.dumps(merged), collection, doc_id),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Update failed in {collection}: {e}") from e
        finally:
            conn.close()

    def delete(self, collection: str, doc_id: str) -> None:
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            if cursor.rowcount == 0:
                raise DocumentNotFoundError(collection, doc_id)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Delete failed in {collection}: {e}") from e
        finally:
            conn.close()
