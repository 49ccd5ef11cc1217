"""
Content component - create/read/update/delete for every catalogued entity.
"""

from .catalog import (
    ACHIEVEMENTS,
    APPLICATIONS,
    BLOGS,
    CONTACT_MESSAGES,
    CONTENT_ENTITIES,
    ENTITIES,
    HACKATHONS,
    INBOX_ENTITIES,
    PROJECTS,
    TEAM_MEMBERS,
    EntitySpec,
    reading_time,
)
from .component import ContentService, check_formats, sanitize_fields
from .models import UploadedFile, UploadPolicy
from .ports import AssetStorePort, DocumentStorePort, TimePort

__all__ = [
    # Service
    "ContentService",
    "check_formats",
    "sanitize_fields",
    # Catalog
    "ACHIEVEMENTS",
    "APPLICATIONS",
    "BLOGS",
    "CONTACT_MESSAGES",
    "CONTENT_ENTITIES",
    "ENTITIES",
    "HACKATHONS",
    "INBOX_ENTITIES",
    "PROJECTS",
    "TEAM_MEMBERS",
    "EntitySpec",
    "reading_time",
    # Models
    "UploadPolicy",
    "UploadedFile",
    # Ports
    "AssetStorePort",
    "DocumentStorePort",
    "TimePort",
]
