"""
Tests for sitemap synthesis and regeneration.
"""

import xml.etree.ElementTree as ET

import pytest

from teamsite.components.content import ACHIEVEMENTS, BLOGS, PROJECTS, ContentService
from teamsite.components.settings import SettingsService
from teamsite.components.sitemap import SitemapEntry, SitemapSynthesizer, StaticPage, render_sitemap_xml
from teamsite.domain.entities import SitemapSettings
from teamsite.domain.results import ServiceError, ServiceResult

NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


class FailingReader:
    def list_public(self) -> ServiceResult:
        return ServiceResult.fail(ServiceError(kind="store", code="list_failed", message="offline"))


@pytest.fixture
def services(store, clock) -> dict[str, ContentService]:
    return {
        "blogs": ContentService(BLOGS, store, None, clock),
        "achievements": ContentService(ACHIEVEMENTS, store, None, clock),
        "projects": ContentService(PROJECTS, store, None, clock),
    }


@pytest.fixture
def settings_service(store, clock) -> SettingsService:
    return SettingsService(store, clock)


@pytest.fixture
def synthesizer(services, settings_service, clock) -> SitemapSynthesizer:
    return SitemapSynthesizer(
        blogs=services["blogs"],
        achievements=services["achievements"],
        projects=services["projects"],
        clock=clock,
        settings=settings_service,
        static_pages=[StaticPage("homepage", "/"), StaticPage("blog", "/blog"), StaticPage("faq", "/faq")],
        base_url="https://team.example",
    )


def _urls(xml: str) -> dict[str, dict[str, str]]:
    root = ET.fromstring(xml)
    urls = {}
    for node in root.findall("sm:url", NS):
        fields = {child.tag.split("}")[1]: child.text for child in node}
        urls[fields["loc"]] = fields
    return urls


def test_render_escapes_locations() -> None:
    xml = render_sitemap_xml([SitemapEntry(loc="https://a.example/?q=1&r=<2>", priority="0.5")])
    assert "<loc>https://a.example/?q=1&amp;r=&lt;2&gt;</loc>" in xml
    assert "<lastmod>" not in xml


def test_static_pages_use_settings_priority(synthesizer) -> None:
    urls = _urls(synthesizer.generate())

    assert urls["https://team.example/"]["priority"] == "1.0"
    assert urls["https://team.example/blog"]["priority"] == "0.9"
    assert urls["https://team.example/faq"]["priority"] == "0.5"
    assert urls["https://team.example/"]["changefreq"] == "weekly"


def test_only_published_blogs_listed(synthesizer, services) -> None:
    services["blogs"].create({"title": "Draft"})
    services["blogs"].create({"title": "Hello World", "status": "published"})

    urls = _urls(synthesizer.generate())

    assert "https://team.example/blog/hello-world" in urls
    assert "https://team.example/blog/draft" not in urls
    entry = urls["https://team.example/blog/hello-world"]
    assert entry["priority"] == "0.8"
    assert entry["changefreq"] == "monthly"


def test_dynamic_lastmod_prefers_updated_at(synthesizer, services, store) -> None:
    created = services["projects"].create({"title": "Rover"})
    services["projects"].update(created.id, {"description": "six wheels"})
    updated_at = store.get("projects", created.id)["updatedAt"]

    urls = _urls(synthesizer.generate())

    assert urls["https://team.example/projects/rover"]["lastmod"] == updated_at


def test_category_can_be_disabled(synthesizer, services) -> None:
    services["achievements"].create({"title": "Gold", "date": "2024-01-01"})
    settings = SitemapSettings(base_url="https://team.example", include_achievements=False)

    urls = _urls(synthesizer.generate(settings))

    assert not any("/achievements/" in loc for loc in urls)


def test_failed_category_is_skipped(services, clock) -> None:
    services["projects"].create({"title": "Rover"})
    synthesizer = SitemapSynthesizer(
        blogs=FailingReader(),
        achievements=services["achievements"],
        projects=services["projects"],
        clock=clock,
        base_url="https://team.example",
    )

    urls = _urls(synthesizer.generate())

    assert "https://team.example/projects/rover" in urls
    assert "https://team.example/" in urls


def test_stored_base_url_wins(synthesizer, settings_service) -> None:
    settings_service.update("sitemap", {"baseUrl": "https://stored.example/"})
    urls = _urls(synthesizer.generate())
    assert "https://stored.example/" in urls


def test_regenerate_persists_sitemap(synthesizer, store) -> None:
    result = synthesizer.regenerate({"changeFrequency": "daily"})

    assert result.success
    doc = store.get("settings", "sitemap")
    assert doc["changeFrequency"] == "daily"
    assert doc["generatedSitemap"] == result.data["sitemap"]
    assert doc["lastGenerated"]
    assert "<changefreq>daily</changefreq>" in doc["generatedSitemap"]


def test_regenerate_rejects_bad_overrides(synthesizer, store) -> None:
    result = synthesizer.regenerate({"changeFrequency": "fortnightly"})
    assert result.error.kind == "validation"
    assert store.get("settings", "sitemap") is None
