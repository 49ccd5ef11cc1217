"""
Sitemap component port definitions.

The synthesizer reads through the content service rather than the store, so
it sees exactly what the public pages see (published blogs only).
"""

from __future__ import annotations

from typing import Any, Protocol

from teamsite.core.ports.time import TimePort
from teamsite.domain.results import ServiceResult


class ContentReaderPort(Protocol):
    """Read side of the content service."""

    def list_public(self) -> ServiceResult:
        """Publicly visible documents of one entity type."""
        ...


class SettingsPort(Protocol):
    """Settings singleton access."""

    def get(self, key: str) -> ServiceResult:
        ...

    def update(self, key: str, patch: dict[str, Any]) -> ServiceResult:
        ...


__all__ = ["ContentReaderPort", "SettingsPort", "TimePort"]
