"""
Tests for the /api/send-email relay endpoint.

Status codes:
- 200 OPTIONS preflight and successful relay
- 405 any other non-POST method
- 400 missing type/data, unknown type, missing kind-specific fields
- 500 transport failure
"""

from __future__ import annotations

import asyncio

import pytest

from teamsite.api import deps
from teamsite.api.main import app
from teamsite.core.ports.email import EmailMessage, EmailResult

URL = "/api/send-email"

CONTACT = {
    "name": "Bob",
    "email": "bob@example.com",
    "subject": "Hello",
    "message": "Can we collaborate?",
}


class LoopCheckingEmail:
    """Records whether each send ran while an event loop was active on its thread."""

    def __init__(self) -> None:
        self.loop_running: list[bool] = []

    def send(self, message: EmailMessage) -> EmailResult:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.loop_running.append(False)
        else:
            self.loop_running.append(True)
        return EmailResult.success(message.recipient.email)


class TestMethods:
    def test_options_preflight(self, app_client) -> None:
        response = app_client.options(URL)
        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_other_methods_rejected(self, app_client, method) -> None:
        response = app_client.request(method, URL)
        assert response.status_code == 405
        assert response.json() == {"message": "Method not allowed"}


class TestValidation:
    def test_missing_type(self, app_client) -> None:
        response = app_client.post(URL, json={"data": CONTACT})
        assert response.status_code == 400
        assert response.json() == {"message": "Missing required fields"}

    def test_missing_data(self, app_client) -> None:
        response = app_client.post(URL, json={"type": "contact"})
        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_body_not_json(self, app_client) -> None:
        response = app_client.post(URL, content=b"not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_unknown_type(self, app_client) -> None:
        response = app_client.post(URL, json={"type": "newsletter", "data": CONTACT})
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email type"}

    def test_missing_contact_fields(self, app_client, dev_email) -> None:
        response = app_client.post(URL, json={"type": "contact", "data": {"name": "Bob"}})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Missing contact form fields"
        assert {e["field"] for e in body["errors"]} == {"email", "subject", "message"}
        assert dev_email.email_count == 0

    def test_missing_application_fields(self, app_client) -> None:
        response = app_client.post(URL, json={"type": "application", "data": {"personalInfo": {}}})
        assert response.status_code == 400
        assert response.json()["message"] == "Missing application form fields"


class TestRelay:
    def test_contact_sends_two_emails(self, app_client, dev_email) -> None:
        response = app_client.post(URL, json={"type": "contact", "data": CONTACT})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Emails sent successfully"}
        assert [e.recipient for e in dev_email.sent_emails] == ["admin@team.example", "bob@example.com"]

    def test_application(self, app_client, dev_email) -> None:
        data = {"personalInfo": {"fullName": "Alice", "email": "alice@example.com"}}
        response = app_client.post(URL, json={"type": "application", "data": data})

        assert response.status_code == 200
        assert dev_email.sent_emails[0].subject == "New Team Application - Alice"

    def test_transport_failure(self, app_client, dev_email) -> None:
        dev_email.fail_recipients.add("admin@team.example")

        response = app_client.post(URL, json={"type": "contact", "data": CONTACT})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Failed to send email",
            "error": "admin_send_failed",
        }

    def test_send_runs_off_the_event_loop(self, app_client) -> None:
        transport = LoopCheckingEmail()
        app.dependency_overrides[deps.get_email_adapter] = lambda: transport

        response = app_client.post(URL, json={"type": "contact", "data": CONTACT})

        assert response.status_code == 200
        assert transport.loop_running == [False, False]
