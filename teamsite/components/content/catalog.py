"""
Entity catalog for the content service.

Every collection shares one create/read/update/delete pipeline; what differs
per entity (collection name, asset prefix, image layout, slug, ordering,
which fields are sanitized) lives in an `EntitySpec`. Entity-specific derived
fields are computed by a `prepare` hook that runs on every write.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from teamsite.domain import collections as c
from teamsite.domain.entities import (
    Achievement,
    Application,
    Blog,
    ContactMessage,
    Document,
    Hackathon,
    Project,
    TeamMember,
)

ImageMode = Literal["none", "single", "multi"]

# (patch, existing document or None on create, timestamp) -> None, mutates patch
PrepareHook = Callable[[dict[str, Any], dict[str, Any] | None, str], None]

WORDS_PER_MINUTE = 200


@dataclass(frozen=True)
class EntitySpec:
    """Per-entity parameters for the content pipeline."""

    name: str
    model: type[Document]
    collection: str
    order_by: str
    direction: Literal["asc", "desc"] = "desc"
    asset_prefix: str | None = None
    image_mode: ImageMode = "none"
    image_field: str | None = None
    slugged: bool = False
    sanitized_fields: tuple[str, ...] = ()
    email_fields: tuple[str, ...] = ()
    phone_fields: tuple[str, ...] = ()
    # None means every field may be updated
    mutable_fields: frozenset[str] | None = None
    create_defaults: dict[str, Any] = field(default_factory=dict)
    public_where: dict[str, Any] = field(default_factory=dict)
    prepare: PrepareHook | None = None

    def asset_refs(self, doc: dict[str, Any]) -> list[str]:
        """Asset URLs a document references, de-duplicated in order."""
        refs: list[str] = []
        if self.image_mode == "multi":
            refs.extend(doc.get("images") or [])
        if self.image_field:
            value = doc.get(self.image_field)
            if value:
                refs.append(value)
        return list(dict.fromkeys(r for r in refs if isinstance(r, str) and r))


def reading_time(content: str) -> int:
    """Minutes to read at 200 words per minute, rounded up."""
    return math.ceil(len((content or "").split()) / WORDS_PER_MINUTE)


def prepare_blog(patch: dict[str, Any], existing: dict[str, Any] | None, now: str) -> None:
    if "content" in patch or existing is None:
        patch["readingTime"] = reading_time(patch.get("content", ""))

    if "status" not in patch and existing is not None:
        return
    was_published = existing is not None and existing.get("status") == "published"
    status = patch.get("status", "draft")
    if status == "published" and not was_published:
        patch["publishedAt"] = now
    elif status != "published":
        patch["publishedAt"] = None


TEAM_MEMBERS = EntitySpec(
    name="team-members",
    model=TeamMember,
    collection=c.COLLECTION_TEAM_MEMBERS,
    order_by="createdAt",
    asset_prefix=c.PREFIX_TEAM_MEMBERS,
    image_mode="single",
    image_field="imageUrl",
    sanitized_fields=("name", "role", "description"),
    email_fields=("email",),
)

HACKATHONS = EntitySpec(
    name="hackathons",
    model=Hackathon,
    collection=c.COLLECTION_HACKATHONS,
    order_by="date",
    asset_prefix=c.PREFIX_HACKATHONS,
    image_mode="single",
    image_field="imageUrl",
    sanitized_fields=("title", "description", "location", "result", "prize"),
)

ACHIEVEMENTS = EntitySpec(
    name="achievements",
    model=Achievement,
    collection=c.COLLECTION_ACHIEVEMENTS,
    order_by="date",
    asset_prefix=c.PREFIX_ACHIEVEMENTS,
    image_mode="multi",
    image_field="featuredImage",
    slugged=True,
    sanitized_fields=("title", "description", "location", "category", "position", "prize"),
)

PROJECTS = EntitySpec(
    name="projects",
    model=Project,
    collection=c.COLLECTION_PROJECTS,
    order_by="createdAt",
    asset_prefix=c.PREFIX_PROJECTS,
    image_mode="multi",
    image_field="featuredImage",
    slugged=True,
    sanitized_fields=("title", "description", "category", "seoTitle", "seoDescription"),
)

BLOGS = EntitySpec(
    name="blogs",
    model=Blog,
    collection=c.COLLECTION_BLOGS,
    order_by="createdAt",
    asset_prefix=c.PREFIX_BLOGS,
    image_mode="single",
    image_field="featuredImage",
    slugged=True,
    sanitized_fields=("title", "excerpt", "category", "seoTitle", "seoDescription"),
    public_where={"status": "published"},
    prepare=prepare_blog,
)

APPLICATIONS = EntitySpec(
    name="applications",
    model=Application,
    collection=c.COLLECTION_APPLICATIONS,
    order_by="createdAt",
    sanitized_fields=(
        "personalInfo.fullName",
        "personalInfo.college",
        "personalInfo.branch",
        "personalInfo.year",
        "personalInfo.preferredRole",
        "personalInfo.experience",
        "personalInfo.motivation",
    ),
    email_fields=("personalInfo.email",),
    phone_fields=("personalInfo.phone",),
    mutable_fields=frozenset({"status"}),
    create_defaults={"status": "pending"},
)

CONTACT_MESSAGES = EntitySpec(
    name="contact-messages",
    model=ContactMessage,
    collection=c.COLLECTION_CONTACT_MESSAGES,
    order_by="createdAt",
    sanitized_fields=("name", "subject", "message"),
    email_fields=("email",),
    mutable_fields=frozenset({"status"}),
    create_defaults={"status": "unread"},
)

ENTITIES: dict[str, EntitySpec] = {
    spec.name: spec
    for spec in (
        TEAM_MEMBERS,
        HACKATHONS,
        ACHIEVEMENTS,
        PROJECTS,
        BLOGS,
        APPLICATIONS,
        CONTACT_MESSAGES,
    )
}

# Entities with public list/detail pages and admin create
CONTENT_ENTITIES = ("team-members", "hackathons", "achievements", "projects", "blogs")
# Inbound form submissions (admin may only read, set status, delete)
INBOX_ENTITIES = ("applications", "contact-messages")
