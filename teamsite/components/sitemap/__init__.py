"""
Sitemap component - sitemap.xml synthesis and persistence.
"""

from .component import SitemapSynthesizer, render_sitemap_xml
from .models import DEFAULT_STATIC_PAGES, DynamicCategory, SitemapEntry, StaticPage
from .ports import ContentReaderPort, SettingsPort

__all__ = [
    "DEFAULT_STATIC_PAGES",
    "ContentReaderPort",
    "DynamicCategory",
    "SettingsPort",
    "SitemapEntry",
    "SitemapSynthesizer",
    "StaticPage",
    "render_sitemap_xml",
]
