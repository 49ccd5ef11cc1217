"""
Asset store contract, exercised against the filesystem adapter.
"""

import pytest

from teamsite.adapters.local_storage import LocalAssetStore, safe_filename
from teamsite.core.ports.storage import AssetNotFoundError, AssetOwnershipError, StorageError

BASE = "http://testserver/uploads"


@pytest.fixture
def assets(tmp_path) -> LocalAssetStore:
    return LocalAssetStore(tmp_path / "uploads", BASE)


def test_upload_returns_public_url_under_prefix(assets: LocalAssetStore) -> None:
    url = assets.upload(b"png-bytes", "logo.png", prefix="team-members")
    assert url.startswith(f"{BASE}/team-members/")
    assert url.endswith("-logo.png")
    assert assets.resolve(assets.key_for_url(url)).read_bytes() == b"png-bytes"


def test_uploads_get_unique_keys(assets: LocalAssetStore) -> None:
    first = assets.upload(b"a", "same.png", prefix="blogs")
    second = assets.upload(b"b", "same.png", prefix="blogs")
    assert first != second


def test_delete_is_idempotent(assets: LocalAssetStore) -> None:
    url = assets.upload(b"x", "a.png", prefix="projects")
    assert assets.delete_by_url(url) is True
    assert assets.delete_by_url(url) is False


def test_foreign_url_is_rejected(assets: LocalAssetStore) -> None:
    with pytest.raises(AssetOwnershipError):
        assets.delete_by_url("https://elsewhere.example/uploads/blogs/a.png")


def test_traversal_is_rejected(assets: LocalAssetStore) -> None:
    with pytest.raises(StorageError):
        assets.delete_by_url(f"{BASE}/../../etc/passwd")


def test_resolve_missing_key(assets: LocalAssetStore) -> None:
    with pytest.raises(AssetNotFoundError):
        assets.resolve("blogs/missing.png")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("photo.jpg", "photo.jpg"),
        ("../../evil.sh", "evil.sh"),
        ("my photo (1).png", "my-photo--1-.png"),
        ("", "file"),
        (".hidden", "hidden"),
    ],
)
def test_safe_filename(name: str, expected: str) -> None:
    assert safe_filename(name) == expected
