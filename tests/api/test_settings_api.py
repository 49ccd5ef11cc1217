"""
Tests for settings reads, admin updates and sitemap regeneration.
"""

from __future__ import annotations

import json


def test_unsaved_settings_are_null(app_client) -> None:
    response = app_client.get("/api/settings/welcome")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None}


def test_unknown_key(app_client) -> None:
    response = app_client.get("/api/settings/colours")
    assert response.status_code == 404
    assert response.json()["detail"]["errors"][0]["code"] == "unknown_settings_key"


def test_effective_defaults(app_client) -> None:
    data = app_client.get("/api/settings/donations/effective").json()["data"]
    assert data["title"] == "Support Our Innovation"
    assert data["minimumAmount"] == 100


def test_update_requires_admin(app_client) -> None:
    response = app_client.put("/api/admin/settings/seo", data={"data": "{}"})
    assert response.status_code == 401


def test_update_then_read(admin_client) -> None:
    response = admin_client.put(
        "/api/admin/settings/joinTeam",
        data={"data": json.dumps({"title": "Build With Us", "requirements": ["Curiosity"]})},
    )

    assert response.status_code == 200
    stored = admin_client.get("/api/settings/joinTeam").json()["data"]
    assert stored["title"] == "Build With Us"
    assert stored["createdAt"] == stored["updatedAt"]


def test_invalid_theme_color(admin_client) -> None:
    response = admin_client.put("/api/admin/settings/ui", data={"data": '{"primaryColor": "red"}'})
    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "primaryColor"


def test_click_sound_upload(admin_client) -> None:
    response = admin_client.put(
        "/api/admin/settings/welcome",
        data={"data": '{"enabled": true}'},
        files={"file": ("beep.mp3", b"ID3\x03", "audio/mpeg")},
    )

    assert response.status_code == 200
    url = response.json()["data"]["clickSoundUrl"]
    assert admin_client.get(url.removeprefix("http://testserver")).content == b"ID3\x03"


def test_regenerate_sitemap(admin_client) -> None:
    response = admin_client.post("/api/admin/sitemap/regenerate", json={"changeFrequency": "daily"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert "<changefreq>daily</changefreq>" in data["sitemap"]
    stored = admin_client.get("/api/settings/sitemap").json()["data"]
    assert stored["generatedSitemap"] == data["sitemap"]
    assert stored["lastGenerated"]


def test_regenerate_without_body(admin_client) -> None:
    response = admin_client.post("/api/admin/sitemap/regenerate")
    assert response.status_code == 200
