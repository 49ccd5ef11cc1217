"""
Asset Store Interface (P2).

Protocol-based interface for binary uploads that must be publicly
retrievable by URL (images, audio).
Implementations: local filesystem served by the app (now), S3-compatible (future).

Contract:
- `upload` returns a URL that dereferences to the object. Eventually
  consistent backends may delay global availability.
- `delete_by_url` takes that URL back. An object that is already gone
  counts as deleted (idempotent), so compensating deletes can be retried.
"""

from __future__ import annotations

from typing import Protocol


class AssetStorePort(Protocol):
    """Asset storage port interface."""

    def upload(
        self,
        data: bytes,
        suggested_name: str,
        *,
        prefix: str,
        content_type: str | None = None,
    ) -> str:
        """
        Store bytes under a unique key in the prefix namespace.

        Args:
            data: Object bytes
            suggested_name: Original filename (sanitized into the key)
            prefix: Path namespace, e.g. "achievements"
            content_type: MIME type, if known

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: On quota, permission or I/O failure
        """
        ...

    def delete_by_url(self, url: str) -> bool:
        """
        Delete the object behind a URL returned by `upload`.

        Returns:
            True if deleted, False if it was already gone

        Raises:
            AssetOwnershipError: If the URL does not belong to this store
            StorageError: On permission or I/O failure
        """
        ...


class StorageError(Exception):
    """Base class for asset storage errors."""


class AssetOwnershipError(StorageError):
    """Raised when a URL does not resolve to an object this store owns."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"URL is not owned by this asset store: {url}")


class AssetNotFoundError(StorageError):
    """Raised when a key doesn't exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Asset not found: {key}")
