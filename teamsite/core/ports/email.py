"""
Email Transport Interface (P4).

Protocol-based interface for sending transactional emails.
Used by the notification relay for admin notices and submitter acknowledgements.

Key requirements:
- HTML and plain text body
- Stateless send operation
- Never raises on delivery failure; returns a FAILED result instead

Implementation strategies:
1. DevEmailAdapter: Logs emails (dev/test)
2. SMTPEmailAdapter: Sends via an authenticated SMTP server
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    """Email send result status."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"  # Dev adapter or dry-run


@dataclass(frozen=True)
class EmailAddress:
    """
    Email address with optional display name.

    Examples:
        EmailAddress("user@example.com")
        EmailAddress("user@example.com", "Team Site")
    """

    email: str
    name: str | None = None

    def __str__(self) -> str:
        """Format as RFC 5322 address."""
        if self.name:
            safe_name = self.name.replace('"', '\\"')
            return f'"{safe_name}" <{self.email}>'
        return self.email


@dataclass(frozen=True)
class EmailMessage:
    """Email message to be sent."""

    recipient: EmailAddress
    subject: str
    body_html: str
    body_text: str = ""
    sender: EmailAddress | None = None  # None = use default sender
    reply_to: EmailAddress | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.recipient.email:
            raise EmailValidationError("Recipient email is required", field="recipient")
        if not self.subject:
            raise EmailValidationError("Subject is required", field="subject")
        if not self.body_html and not self.body_text:
            raise EmailValidationError("At least one of body_html or body_text is required")


@dataclass
class EmailResult:
    """Result of an email send attempt."""

    status: EmailStatus
    message_id: str | None = None
    error: str | None = None
    sent_at: datetime | None = None
    recipient: str = ""

    @property
    def delivered(self) -> bool:
        """True unless the transport failed. Skipped (dev) counts as delivered."""
        return self.status is not EmailStatus.FAILED

    @classmethod
    def success(cls, recipient: str, message_id: str | None = None) -> EmailResult:
        return cls(
            status=EmailStatus.SENT,
            message_id=message_id,
            recipient=recipient,
            sent_at=datetime.now(UTC),
        )

    @classmethod
    def skipped(cls, recipient: str, reason: str = "Dev mode") -> EmailResult:
        return cls(status=EmailStatus.SKIPPED, recipient=recipient, error=reason)

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        return cls(status=EmailStatus.FAILED, recipient=recipient, error=error)


class EmailPort(Protocol):
    """Email sending interface."""

    def send(self, message: EmailMessage) -> EmailResult:
        """
        Send an email message.

        Returns:
            EmailResult with send outcome. Must not raise on transport failure.
        """
        ...


# --- Error Types ---


class EmailError(Exception):
    """Base exception for email-related errors."""


class EmailValidationError(EmailError):
    """Invalid email address or message format."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)

