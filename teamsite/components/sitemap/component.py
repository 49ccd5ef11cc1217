"""
Sitemap component - sitemaps.org XML from static routes and published content.

Static routes take their priority from the sitemap settings (by route name)
and the settings change frequency. Blogs, achievements and projects follow,
one <url> each at `<prefix>/<slug or id>`, when their category is enabled.

A category whose fetch fails is left out and logged; the rest of the
sitemap is still produced.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from teamsite.core.ports.time import to_timestamp
from teamsite.domain.entities import SitemapSettings
from teamsite.domain.results import ServiceError, ServiceResult, errors_from_pydantic

from .models import (
    ACHIEVEMENT_CATEGORY,
    BLOG_CATEGORY,
    DEFAULT_STATIC_PAGES,
    PROJECT_CATEGORY,
    DynamicCategory,
    SitemapEntry,
    StaticPage,
)
from .ports import ContentReaderPort, SettingsPort, TimePort

logger = logging.getLogger(__name__)

SITEMAP_SETTINGS_KEY = "sitemap"
DEFAULT_PRIORITY = "0.5"


def _escape_xml(text: str) -> str:
    """Escape XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def render_sitemap_xml(entries: list[SitemapEntry]) -> str:
    """
    Render sitemap entries to XML string.

    Args:
        entries: List of SitemapEntry objects

    Returns:
        Valid sitemap.xml content
    """
    xml_parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]

    for entry in entries:
        xml_parts.append("  <url>")
        xml_parts.append(f"    <loc>{_escape_xml(entry.loc)}</loc>")
        if entry.lastmod:
            xml_parts.append(f"    <lastmod>{_escape_xml(entry.lastmod)}</lastmod>")
        if entry.changefreq:
            xml_parts.append(f"    <changefreq>{entry.changefreq}</changefreq>")
        if entry.priority is not None:
            xml_parts.append(f"    <priority>{_escape_xml(entry.priority)}</priority>")
        xml_parts.append("  </url>")

    xml_parts.append("</urlset>")
    return "\n".join(xml_parts)


class SitemapSynthesizer:
    def __init__(
        self,
        blogs: ContentReaderPort,
        achievements: ContentReaderPort,
        projects: ContentReaderPort,
        clock: TimePort,
        settings: SettingsPort | None = None,
        static_pages: tuple[StaticPage, ...] | list[StaticPage] = DEFAULT_STATIC_PAGES,
        base_url: str | None = None,
        default_priority: str = DEFAULT_PRIORITY,
    ):
        self.blogs = blogs
        self.achievements = achievements
        self.projects = projects
        self.clock = clock
        self.settings = settings
        self.static_pages = list(static_pages)
        self.base_url = base_url
        self.default_priority = default_priority

    def load_settings(self) -> SitemapSettings:
        """
        Stored sitemap settings over defaults.

        The configured site base URL stands in for `baseUrl` until an admin
        stores one. Unreadable or invalid settings fall back to defaults.
        """
        defaults: dict[str, Any] = {}
        if self.base_url:
            defaults["baseUrl"] = self.base_url
        if self.settings is None:
            return SitemapSettings.model_validate(defaults)

        result = self.settings.get(SITEMAP_SETTINGS_KEY)
        if not result.success:
            logger.warning("Sitemap settings unavailable, using defaults: %s", result.error)
            return SitemapSettings.model_validate(defaults)
        try:
            return SitemapSettings.model_validate({**defaults, **(result.data or {})})
        except PydanticValidationError as e:
            logger.warning("Stored sitemap settings are invalid, using defaults: %s", e)
            return SitemapSettings.model_validate(defaults)

    def _category_entries(
        self,
        reader: ContentReaderPort,
        category: DynamicCategory,
        base_url: str,
        now: str,
    ) -> list[SitemapEntry]:
        result = reader.list_public()
        if not result.success:
            logger.warning("Sitemap omits %s: %s", category.name, result.error)
            return []
        entries = []
        for doc in result.data or []:
            segment = doc.get("slug") or doc.get("id")
            if not segment:
                continue
            entries.append(
                SitemapEntry(
                    loc=f"{base_url}{category.path_prefix}/{segment}",
                    lastmod=doc.get("updatedAt") or doc.get("createdAt") or now,
                    changefreq=category.changefreq,
                    priority=category.priority,
                )
            )
        return entries

    def entries(self, settings: SitemapSettings) -> list[SitemapEntry]:
        base_url = settings.base_url.rstrip("/")
        now = to_timestamp(self.clock.now_utc())

        entries = [
            SitemapEntry(
                loc=f"{base_url}{page.path}",
                lastmod=now,
                changefreq=settings.change_frequency,
                priority=settings.priority.get(page.name, self.default_priority),
            )
            for page in self.static_pages
        ]
        if settings.include_blogs:
            entries.extend(self._category_entries(self.blogs, BLOG_CATEGORY, base_url, now))
        if settings.include_achievements:
            entries.extend(
                self._category_entries(self.achievements, ACHIEVEMENT_CATEGORY, base_url, now)
            )
        if settings.include_projects:
            entries.extend(self._category_entries(self.projects, PROJECT_CATEGORY, base_url, now))
        return entries

    def generate(self, settings: SitemapSettings | None = None) -> str:
        """Sitemap XML for the given (or stored) settings."""
        if settings is None:
            settings = self.load_settings()
        return render_sitemap_xml(self.entries(settings))

    def regenerate(self, overrides: dict[str, Any] | None = None) -> ServiceResult:
        """
        Generate and store the sitemap in the sitemap settings singleton.

        `overrides` are settings fields to apply (and persist) first, as sent
        by the admin sitemap form.
        """
        if self.settings is None:
            return ServiceResult.fail(
                ServiceError(
                    kind="store",
                    code="settings_unavailable",
                    message="Sitemap settings store is not configured",
                )
            )
        settings = self.load_settings()
        if overrides:
            try:
                settings = SitemapSettings.model_validate(
                    {**settings.model_dump(by_alias=True), **overrides}
                )
            except PydanticValidationError as e:
                return ServiceResult.fail(*errors_from_pydantic(e))

        sitemap = self.generate(settings)
        patch = {
            **(overrides or {}),
            "lastGenerated": to_timestamp(self.clock.now_utc()),
            "generatedSitemap": sitemap,
        }
        result = self.settings.update(SITEMAP_SETTINGS_KEY, patch)
        if not result.success:
            return result
        return ServiceResult.ok(id=SITEMAP_SETTINGS_KEY, data={**patch, "sitemap": sitemap})
