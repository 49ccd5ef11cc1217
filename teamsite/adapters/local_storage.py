"""
Local Filesystem Asset Store (P2 Implementation).

Implements AssetStorePort on the local filesystem. Objects are written to
{base_path}/{prefix}/{uuid}-{name} and served by the app under
{public_base_url}/{prefix}/{uuid}-{name}.

Example:
    upload(b"...", "logo.png", prefix="team-members")
    -> "http://localhost:8000/uploads/team-members/3f2a...-logo.png"
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from urllib.parse import unquote
from uuid import uuid4

from teamsite.core.ports.storage import (
    AssetNotFoundError,
    AssetOwnershipError,
    StorageError,
)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def safe_filename(name: str) -> str:
    """Reduce a client filename to a conservative key segment."""
    base = os.path.basename(name or "").strip() or "file"
    cleaned = _UNSAFE_NAME_CHARS.sub("-", base)
    return cleaned.lstrip(".") or "file"


class LocalAssetStore:
    def __init__(self, base_path: str | Path, public_base_url: str):
        self.base_path = Path(base_path).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        # Prevent traversal
        target = (self.base_path / key).resolve()
        if not target.is_relative_to(self.base_path):
            raise StorageError(f"Path traversal attempt detected: {key}")
        return target

    def key_for_url(self, url: str) -> str:
        """Map a public URL back to its storage key."""
        prefix = self.public_base_url + "/"
        if not url or not url.startswith(prefix):
            raise AssetOwnershipError(url)
        key = unquote(url[len(prefix):].split("?", 1)[0])
        if not key:
            raise AssetOwnershipError(url)
        return key

    def upload(
        self,
        data: bytes,
        suggested_name: str,
        *,
        prefix: str,
        content_type: str | None = None,
    ) -> str:
        key = f"{prefix.strip('/')}/{uuid4().hex}-{safe_filename(suggested_name)}"
        target = self._safe_path(key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Upload failed for {key}: {e}") from e
        return f"{self.public_base_url}/{key}"

    def delete_by_url(self, url: str) -> bool:
        target = self._safe_path(self.key_for_url(url))
        if not target.exists():
            return False
        try:
            os.remove(target)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Delete failed for {url}: {e}") from e
        return True

    def resolve(self, key: str) -> Path:
        """
        Filesystem path for a stored key (used by the asset route).

        Raises:
            AssetNotFoundError: If no object exists under the key
        """
        target = self._safe_path(key)
        if not target.is_file():
            raise AssetNotFoundError(key)
        return target
