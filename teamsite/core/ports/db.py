"""
Document Store Interface (P1).

Protocol-based interface for a schemaless document database.
Implementations: in-memory (dev/test), SQLite JSON documents (single server).

Contract:
- Documents are plain dicts grouped into named collections.
- `create` returns the store-assigned id unless a fixed id is supplied.
- `update` has merge semantics: unspecified fields are left untouched.
- `query` supports equality filters and a single ordering field only.
  Ordering is stable only on the requested field (no secondary sort).
- Documents returned by `get`/`query` carry their id under "id".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class Query:
    """Equality filters plus an optional ordering field."""

    where: dict[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    direction: SortDirection = "asc"


class DocumentStorePort(Protocol):
    """Document store port interface."""

    def create(
        self,
        collection: str,
        doc: dict[str, Any],
        *,
        doc_id: str | None = None,
    ) -> str:
        """
        Write a new document.

        Args:
            collection: Collection name
            doc: Document fields (an "id" key is ignored)
            doc_id: Fixed id for singleton documents; generated when None

        Returns:
            The document id

        Raises:
            DocumentExistsError: If doc_id is given and already used
            StoreError: On permission or connectivity failure
        """
        ...

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Get a document by id, or None if missing."""
        ...

    def query(self, collection: str, query: Query | None = None) -> list[dict[str, Any]]:
        """List documents matching equality filters, ordered by one field."""
        ...

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        """
        Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        """
        Delete a document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        ...


# --- Error Types ---


class StoreError(Exception):
    """Base class for document store errors (permission, connectivity)."""


class DocumentNotFoundError(StoreError):
    """Raised on update/delete of a missing document."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document not found: {collection}/{doc_id}")


class DocumentExistsError(StoreError):
    """Raised when creating a document under an id that is already used."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document already exists: {collection}/{doc_id}")
