"""
End-to-end content lifecycle on the SQLite store and local asset storage.
"""

import pytest

from teamsite.adapters.sqlite_store import SQLiteDocumentStore
from teamsite.components.content import ACHIEVEMENTS, BLOGS, PROJECTS, ContentService, UploadedFile
from teamsite.components.settings import SettingsService
from teamsite.components.sitemap import SitemapSynthesizer
from teamsite.core.ports.storage import AssetNotFoundError


@pytest.fixture
def docs(tmp_path):
    return SQLiteDocumentStore(str(tmp_path / "site.db"))


@pytest.fixture
def achievements(docs, asset_store, clock):
    return ContentService(ACHIEVEMENTS, docs, asset_store, clock)


@pytest.fixture
def blogs(docs, asset_store, clock):
    return ContentService(BLOGS, docs, asset_store, clock)


def _image(name):
    return UploadedFile(name, b"\x89PNG" + name.encode(), "image/png")


def test_achievement_lifecycle(achievements, docs, asset_store):
    created = achievements.create(
        {"title": "Smart India Hackathon", "date": "2024-12-10", "highlights": ["Finalist"]},
        [_image("stage.png"), _image("team.png")],
    )
    assert created.success

    public = achievements.get_by_slug("smart-india-hackathon")
    assert public.id == created.id
    images = public.data["images"]
    assert public.data["featuredImage"] == images[0]
    for url in images:
        assert asset_store.resolve(asset_store.key_for_url(url)).is_file()

    updated = achievements.update(created.id, {"title": "SIH 2024 Winners"}, [_image("trophy.png")])
    assert updated.success
    assert updated.data["slug"] == "sih-2024-winners"
    assert updated.data["featuredImage"] == updated.data["images"][0]
    for url in images:
        with pytest.raises(AssetNotFoundError):
            asset_store.resolve(asset_store.key_for_url(url))

    remaining = updated.data["images"]
    assert achievements.delete(created.id).success
    assert docs.get("achievements", created.id) is None
    with pytest.raises(AssetNotFoundError):
        asset_store.resolve(asset_store.key_for_url(remaining[0]))


def test_published_blog_reaches_sitemap(blogs, achievements, docs, clock):
    blogs.create({"title": "Draft Notes"})
    blogs.create({"title": "Building a Line Follower", "content": "word " * 300, "status": "published"})
    settings = SettingsService(docs, clock)
    synthesizer = SitemapSynthesizer(
        blogs=blogs,
        achievements=achievements,
        projects=ContentService(PROJECTS, docs, None, clock),
        clock=clock,
        settings=settings,
        base_url="https://team.example",
    )

    result = synthesizer.regenerate()

    assert result.success
    stored = docs.get("settings", "sitemap")
    assert "https://team.example/blog/building-a-line-follower" in stored["generatedSitemap"]
    assert "draft-notes" not in stored["generatedSitemap"]
    assert stored["createdAt"] == stored["updatedAt"]


def test_settings_upsert_on_sqlite(docs, clock):
    settings = SettingsService(docs, clock)

    settings.update("seo", {"siteName": "Team"})
    first = docs.get("settings", "seo")
    settings.update("seo", {"globalTitle": "Team | Robotics"})
    second = docs.get("settings", "seo")

    assert second["siteName"] == "Team"
    assert second["globalTitle"] == "Team | Robotics"
    assert second["createdAt"] == first["createdAt"]
    assert second["updatedAt"] > first["updatedAt"]
