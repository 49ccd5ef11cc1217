"""
In-memory Document Store (P1 Implementation).

Dict-backed implementation of DocumentStorePort for local development and
tests. Documents are deep-copied on the way in and out so callers never
share mutable state with the store.
"""

from __future__ import annotations

import copy
from threading import Lock
from typing import Any
from uuid import uuid4

from teamsite.core.ports.db import (
    DocumentExistsError,
    DocumentNotFoundError,
    Query,
    StoreError,
)


def order_documents(
    docs: list[dict[str, Any]],
    order_by: str | None,
    direction: str,
) -> list[dict[str, Any]]:
    """Order by a single field; documents lacking the field go last."""
    if not order_by:
        return docs
    present = [d for d in docs if d.get(order_by) is not None]
    missing = [d for d in docs if d.get(order_by) is None]
    try:
        present.sort(key=lambda d: d[order_by], reverse=direction == "desc")
    except TypeError as e:
        raise StoreError(f"Cannot order by mixed-type field '{order_by}'") from e
    return present + missing


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = Lock()

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def create(
        self,
        collection: str,
        doc: dict[str, Any],
        *,
        doc_id: str | None = None,
    ) -> str:
        with self._lock:
            docs = self._collection(collection)
            new_id = doc_id or uuid4().hex
            if new_id in docs:
                raise DocumentExistsError(collection, new_id)
            stored = copy.deepcopy(doc)
            stored.pop("id", None)
            docs[new_id] = stored
            return new_id

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self._lock:
            stored = self._collection(collection).get(doc_id)
            if stored is None:
                return None
            return {"id": doc_id, **copy.deepcopy(stored)}

    def query(self, collection: str, query: Query | None = None) -> list[dict[str, Any]]:
        query = query or Query()
        with self._lock:
            results = [
                {"id": doc_id, **copy.deepcopy(stored)}
                for doc_id, stored in self._collection(collection).items()
                if all(stored.get(k) == v for k, v in query.where.items())
            ]
        return order_documents(results, query.order_by, query.direction)

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        with self._lock:
            docs = self._collection(collection)
            if doc_id not in docs:
                raise DocumentNotFoundError(collection, doc_id)
            changes = copy.deepcopy(partial)
            changes.pop("id", None)
            docs[doc_id].update(changes)

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._collection(collection)
            if doc_id not in docs:
                raise DocumentNotFoundError(collection, doc_id)
            del docs[doc_id]
