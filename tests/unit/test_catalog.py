"""
Entity catalog consistency.
"""

from teamsite.api.routes.content import AdminEntity, PublicEntity
from teamsite.components.content import (
    ACHIEVEMENTS,
    BLOGS,
    CONTENT_ENTITIES,
    ENTITIES,
    HACKATHONS,
    INBOX_ENTITIES,
)
from teamsite.domain import collections as c


def test_routes_cover_catalog() -> None:
    assert {e.value for e in PublicEntity} == set(CONTENT_ENTITIES)
    assert {e.value for e in AdminEntity} == set(ENTITIES)
    assert set(CONTENT_ENTITIES) | set(INBOX_ENTITIES) == set(ENTITIES)


def test_collection_names() -> None:
    assert ENTITIES["team-members"].collection == c.COLLECTION_TEAM_MEMBERS == "teamMembers"
    assert ENTITIES["contact-messages"].collection == "contactMessages"


def test_inbox_entities_take_no_files() -> None:
    for name in INBOX_ENTITIES:
        assert ENTITIES[name].image_mode == "none"
        assert ENTITIES[name].mutable_fields == frozenset({"status"})


def test_asset_refs_multi_image() -> None:
    doc = {"images": ["u1", "u2"], "featuredImage": "u1"}
    assert ACHIEVEMENTS.asset_refs(doc) == ["u1", "u2"]


def test_asset_refs_single_image() -> None:
    assert HACKATHONS.asset_refs({"imageUrl": "u1"}) == ["u1"]
    assert BLOGS.asset_refs({"featuredImage": None}) == []
