"""
Settings component models.

One singleton document per concern, stored in the `settings` collection
under a fixed id.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from teamsite.domain.entities import (
    DonationSettings,
    JoinTeamSettings,
    SEOSettings,
    SettingsDocument,
    SitemapSettings,
    Theme,
    WelcomeSettings,
)

SettingsKey = Literal["welcome", "seo", "joinTeam", "donations", "ui", "sitemap"]

SETTINGS_MODELS: dict[str, type[SettingsDocument]] = {
    "welcome": WelcomeSettings,
    "seo": SEOSettings,
    "joinTeam": JoinTeamSettings,
    "donations": DonationSettings,
    "ui": Theme,
    "sitemap": SitemapSettings,
}

# Only the welcome singleton carries an upload (the click sound)
AUDIO_FIELD = "clickSoundUrl"
AUDIO_KEY = "welcome"


class UpsertState(Enum):
    """States of the singleton write: try a merge update, else create."""

    UPDATING = "updating"
    CREATING = "creating"
