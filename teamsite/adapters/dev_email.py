"""
Dev Email Adapter (P4 Implementation).

Logs emails instead of sending. Used for local development and tests,
selected with TEAMSITE_EMAIL_BACKEND=dev.

Key behaviors:
- Logs email details through the module logger
- Returns SKIPPED status (not SENT)
- Stores emails in memory for test assertions
- Can be told to fail for given recipients to exercise partial sends
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from teamsite.core.ports.email import (
    EmailMessage,
    EmailResult,
    EmailStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    body_html: str
    body_text: str
    sender: str | None
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """Dev email adapter that logs instead of sending."""

    sent_emails: list[SentEmail] = field(default_factory=list)
    fail_recipients: set[str] = field(default_factory=set)

    log_level: int = logging.INFO
    log_body: bool = True
    body_preview_length: int = 100

    def send(self, message: EmailMessage) -> EmailResult:
        recipient = message.recipient.email
        if recipient in self.fail_recipients:
            logger.warning("EMAIL (dev): simulated failure for %s", recipient)
            return EmailResult.failed(recipient, "Simulated transport failure")

        message_id = f"dev-{uuid4().hex[:12]}"
        sender_str = str(message.sender) if message.sender else None

        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=recipient,
                subject=message.subject,
                body_html=message.body_html,
                body_text=message.body_text,
                sender=sender_str,
                logged_at=datetime.now(UTC),
            )
        )
        self._log_email(message, message_id, sender_str)

        return EmailResult(
            status=EmailStatus.SKIPPED,
            message_id=message_id,
            recipient=recipient,
            error="Dev mode - email logged, not sent",
        )

    def _log_email(self, message: EmailMessage, message_id: str, sender: str | None) -> None:
        parts = [
            f"EMAIL (dev): To={message.recipient}",
            f"Subject={message.subject}",
        ]
        if sender:
            parts.append(f"From={sender}")
        if self.log_body and message.body_html:
            preview = message.body_html[: self.body_preview_length]
            if len(message.body_html) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")
        parts.append(f"MessageID={message_id}")
        logger.log(self.log_level, ", ".join(parts))

    # --- Test Helper Methods ---

    def get_emails_to(self, recipient: str) -> list[SentEmail]:
        """Get all emails logged to a specific recipient."""
        return [e for e in self.sent_emails if e.recipient == recipient]

    def clear(self) -> None:
        """Clear all stored emails (for test isolation)."""
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        return len(self.sent_emails)
