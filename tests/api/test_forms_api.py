"""
Tests for public contact and application submissions.
"""

from __future__ import annotations

CONTACT = {
    "name": "<b>Bob</b>",
    "email": "bob@example.com",
    "subject": "Workshop",
    "message": "Can you run a workshop?",
}

APPLICATION = {
    "personalInfo": {
        "fullName": "Alice Doe",
        "email": "alice@example.com",
        "phone": "+1 (555) 010-9999",
        "year": "2nd",
        "preferredRole": "Web",
    },
    "quizResults": {"score": 90, "correctAnswers": 9, "totalQuestions": 10, "passed": True},
}


def test_contact_stored_and_relayed(app_client, store, dev_email) -> None:
    response = app_client.post("/api/contact", json=CONTACT)

    assert response.status_code == 201
    body = response.json()
    assert body == {"success": True, "id": body["id"], "emailSent": True}
    doc = store.get("contactMessages", body["id"])
    assert doc["name"] == "bBob/b"
    assert doc["status"] == "unread"
    assert dev_email.email_count == 2


def test_relay_failure_keeps_submission(app_client, store, dev_email) -> None:
    dev_email.fail_recipients.add("admin@team.example")

    response = app_client.post("/api/contact", json=CONTACT)

    assert response.status_code == 201
    assert response.json()["emailSent"] is False
    assert store.get("contactMessages", response.json()["id"]) is not None


def test_invalid_contact_not_stored(app_client, store, dev_email) -> None:
    response = app_client.post("/api/contact", json={**CONTACT, "email": "bob"})

    assert response.status_code == 400
    assert store.query("contactMessages") == []
    assert dev_email.email_count == 0


def test_contact_rate_limited(app_client) -> None:
    # Test config allows two contact submissions per window
    assert app_client.post("/api/contact", json=CONTACT).status_code == 201
    assert app_client.post("/api/contact", json=CONTACT).status_code == 201

    response = app_client.post("/api/contact", json=CONTACT)

    assert response.status_code == 429
    assert response.json()["detail"]["errors"][0]["code"] == "contact_rate_limited"


def test_application_submission(app_client, store, dev_email) -> None:
    response = app_client.post("/api/applications", json={**APPLICATION, "status": "accepted"})

    assert response.status_code == 201
    doc = store.get("applications", response.json()["id"])
    assert doc["status"] == "pending"
    assert doc["quizResults"]["score"] == 90
    assert dev_email.sent_emails[0].subject == "New Team Application - Alice Doe"


def test_application_bad_phone(app_client) -> None:
    bad = {**APPLICATION, "personalInfo": {**APPLICATION["personalInfo"], "phone": "123"}}
    response = app_client.post("/api/applications", json=bad)
    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "personalInfo.phone"


def test_admin_sees_and_triages_submissions(admin_client) -> None:
    created = admin_client.post("/api/applications", json=APPLICATION).json()

    listed = admin_client.get("/api/admin/applications").json()
    assert [a["id"] for a in listed] == [created["id"]]

    rejected = admin_client.put(
        f"/api/admin/applications/{created['id']}",
        data={"data": '{"personalInfo": {"fullName": "Mallory"}}'},
    )
    assert rejected.status_code == 400

    accepted = admin_client.put(
        f"/api/admin/applications/{created['id']}",
        data={"data": '{"status": "accepted"}'},
    )
    assert accepted.status_code == 200
    assert accepted.json()["data"]["status"] == "accepted"
