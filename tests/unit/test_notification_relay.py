"""
Tests for the notification relay (admin notice + acknowledgement).
"""

import pytest

from teamsite.adapters.dev_email import DevEmailAdapter
from teamsite.components.notifications import NotificationRelay, RelayConfig
from teamsite.core.ports.email import EmailMessage, EmailResult

ADMIN = "admin@team.example"

CONTACT = {
    "name": "Bob",
    "email": "bob@example.com",
    "subject": "Sponsorship",
    "message": "Line one\nLine <two>",
}

APPLICATION = {
    "personalInfo": {
        "fullName": "Alice Doe",
        "email": "alice@example.com",
        "phone": "9876543210",
        "year": 2,
        "preferredRole": "Embedded",
    },
    "quizResults": {"score": 55, "correctAnswers": 11, "totalQuestions": 20, "passed": False, "timeSpent": 600},
}


class RecordingEmail:
    def __init__(self) -> None:
        self.messages: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> EmailResult:
        self.messages.append(message)
        return EmailResult.success(message.recipient.email, f"id-{len(self.messages)}")


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(
        admin_inbox=ADMIN,
        sender_email="noreply@team.example",
        site_name="Team Site",
        ack_sender_name="Team Site Crew",
        contact_lines=("Email: team@team.example",),
    )


@pytest.fixture
def transport() -> RecordingEmail:
    return RecordingEmail()


@pytest.fixture
def relay(transport, config, clock) -> NotificationRelay:
    return NotificationRelay(transport, config, clock)


class TestContact:
    def test_admin_then_acknowledgement(self, relay, transport) -> None:
        result = relay.send("contact", CONTACT)

        assert result.success
        assert result.data == {"admin": "sent", "acknowledgement": "sent"}
        admin, ack = transport.messages
        assert admin.recipient.email == ADMIN
        assert admin.subject == "New Contact Message: Sponsorship"
        assert admin.reply_to.email == "bob@example.com"
        assert ack.recipient.email == "bob@example.com"
        assert ack.subject == "Thank you for contacting Team Site"
        assert ack.sender.name == "Team Site Crew"
        assert ack.reply_to is None

    def test_message_is_escaped(self, relay, transport) -> None:
        relay.send("contact", CONTACT)
        admin = transport.messages[0]
        assert "Line one<br>Line &lt;two&gt;" in admin.body_html
        assert "<two>" not in admin.body_html

    def test_subject_line_breaks_collapsed(self, relay, transport) -> None:
        relay.send("contact", {**CONTACT, "subject": "Hi\r\nBcc: victim@example.com"})
        admin = transport.messages[0]
        assert admin.subject == "New Contact Message: Hi Bcc: victim@example.com"

    def test_missing_field(self, relay, transport) -> None:
        result = relay.send("contact", {**CONTACT, "subject": ""})
        assert result.error.kind == "validation"
        assert result.error.field == "subject"
        assert transport.messages == []

    def test_bad_submitter_email(self, relay, transport) -> None:
        result = relay.send("contact", {**CONTACT, "email": "bob"})
        assert result.error.code == "invalid_email"
        assert transport.messages == []


class TestApplication:
    def test_subjects_and_quiz(self, relay, transport) -> None:
        result = relay.send("application", APPLICATION)

        assert result.success
        admin, ack = transport.messages
        assert admin.subject == "New Team Application - Alice Doe"
        assert "color: red" in admin.body_html
        assert "11/20" in admin.body_html
        assert "10 minutes" in admin.body_html
        assert ack.subject == "Application Received - Team Site"
        assert "2025-01-01" in ack.body_html
        assert "below the minimum requirement" in ack.body_html

    def test_missing_personal_info(self, relay, transport) -> None:
        result = relay.send("application", {"quizResults": {"score": 90}})
        assert result.error.field == "personalInfo"
        assert transport.messages == []


class TestFailures:
    def test_unknown_kind(self, relay) -> None:
        result = relay.send("newsletter", CONTACT)
        assert result.error.code == "invalid_type"

    def test_admin_failure_still_acknowledges(self, config, clock) -> None:
        email = DevEmailAdapter(fail_recipients={ADMIN})
        result = NotificationRelay(email, config, clock).send("contact", CONTACT)

        assert not result.success
        assert result.error.kind == "email"
        assert result.error.code == "admin_send_failed"
        assert [e.recipient for e in email.sent_emails] == ["bob@example.com"]

    def test_acknowledgement_failure(self, config, clock) -> None:
        email = DevEmailAdapter(fail_recipients={"bob@example.com"})
        result = NotificationRelay(email, config, clock).send("contact", CONTACT)

        assert [e.code for e in result.errors] == ["ack_send_failed"]
        assert email.get_emails_to(ADMIN)

    def test_dev_transport_counts_as_delivered(self, config, clock) -> None:
        result = NotificationRelay(DevEmailAdapter(), config, clock).send("contact", CONTACT)
        assert result.data == {"admin": "skipped", "acknowledgement": "skipped"}
