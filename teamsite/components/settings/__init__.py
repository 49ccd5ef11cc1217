"""
Settings component - singleton settings with defaults and upsert.
"""

from .component import SettingsService, get_default_settings
from .models import AUDIO_FIELD, SETTINGS_MODELS, SettingsKey, UpsertState
from .ports import AssetStorePort, DocumentStorePort, TimePort

__all__ = [
    "AUDIO_FIELD",
    "SETTINGS_MODELS",
    "AssetStorePort",
    "DocumentStorePort",
    "SettingsKey",
    "SettingsService",
    "TimePort",
    "UpsertState",
    "get_default_settings",
]
