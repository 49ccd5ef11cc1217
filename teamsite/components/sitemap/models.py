"""
Sitemap component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaticPage:
    """A fixed public route; `name` keys into the settings priority map."""

    name: str
    path: str


@dataclass(frozen=True)
class DynamicCategory:
    """One entity collection published under `path_prefix/<slug-or-id>`."""

    name: str
    path_prefix: str
    priority: str
    changefreq: str = "monthly"


@dataclass
class SitemapEntry:
    """Entry for sitemap generation."""

    loc: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: str | None = None


BLOG_CATEGORY = DynamicCategory(name="blogs", path_prefix="/blog", priority="0.8")
ACHIEVEMENT_CATEGORY = DynamicCategory(name="achievements", path_prefix="/achievements", priority="0.7")
PROJECT_CATEGORY = DynamicCategory(name="projects", path_prefix="/projects", priority="0.8")

DEFAULT_STATIC_PAGES = (
    StaticPage("homepage", "/"),
    StaticPage("about", "/about"),
    StaticPage("team", "/team"),
    StaticPage("achievements", "/achievements"),
    StaticPage("projects", "/projects"),
    StaticPage("blog", "/blog"),
    StaticPage("contact", "/contact"),
    StaticPage("join", "/join"),
    StaticPage("donate", "/donate"),
)
