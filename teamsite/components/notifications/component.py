"""
Notification relay - admin notice plus submitter acknowledgement.

Each accepted submission produces two independent sends: the admin mail
first, then the acknowledgement. A failure of one does not stop or undo
the other; the result reports both outcomes.

Payload validation happens before any send, so a rejected payload never
produces a partial notification.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from teamsite.core.ports.email import (
    EmailAddress,
    EmailMessage,
    EmailPort,
    EmailResult,
    EmailValidationError,
)
from teamsite.core.ports.time import TimePort
from teamsite.domain.results import (
    ServiceError,
    ServiceResult,
    errors_from_pydantic,
    validation_error,
)
from teamsite.domain.sanitize import validate_email

from . import templates
from .models import (
    RELAY_KINDS,
    ApplicationPayload,
    ContactPayload,
    RelayConfig,
    RenderedEmail,
)

logger = logging.getLogger(__name__)


class NotificationRelay:
    def __init__(self, email: EmailPort, config: RelayConfig, clock: TimePort):
        self.email = email
        self.config = config
        self.clock = clock

    def _render(
        self,
        kind: str,
        payload: dict[str, Any],
    ) -> tuple[list[tuple[EmailAddress, EmailAddress, RenderedEmail, EmailAddress | None]], list[ServiceError]]:
        """Validate and render (recipient, sender, email, reply_to) for both sends."""
        try:
            if kind == "contact":
                contact = ContactPayload.model_validate(payload)
                submitter = EmailAddress(contact.email, contact.name)
                admin = templates.contact_admin(contact, self.config)
                ack = templates.contact_acknowledgement(contact, self.config)
            else:
                application = ApplicationPayload.model_validate(payload)
                info = application.personal_info
                submitter = EmailAddress(info.email, info.full_name)
                submitted_on = self.clock.now_utc().strftime("%Y-%m-%d")
                admin = templates.application_admin(application, self.config)
                ack = templates.application_acknowledgement(application, self.config, submitted_on)
        except PydanticValidationError as e:
            return [], errors_from_pydantic(e)

        if not validate_email(submitter.email):
            return [], [validation_error("invalid_email", "Invalid email address", "email")]

        return [
            (EmailAddress(self.config.admin_inbox), self.config.admin_sender, admin, submitter),
            (submitter, self.config.ack_sender, ack, None),
        ], []

    def send(self, kind: str, payload: dict[str, Any]) -> ServiceResult:
        """
        Relay a contact or application submission.

        Args:
            kind: "contact" or "application"
            payload: Submitted form fields (camelCase keys)

        Returns:
            ServiceResult; on success `data` holds the per-send statuses.
            Transport failures are `email` errors coded `admin_send_failed`
            or `ack_send_failed`.
        """
        if kind not in RELAY_KINDS:
            return ServiceResult.fail(
                validation_error("invalid_type", f"Unknown notification type '{kind}'", "type")
            )

        sends, errors = self._render(kind, payload or {})
        if errors:
            return ServiceResult.fail(*errors)

        outcomes: dict[str, EmailResult] = {}
        failures: list[ServiceError] = []
        for label, (recipient, sender, rendered, reply_to) in zip(
            ("admin", "acknowledgement"), sends, strict=True
        ):
            try:
                message = EmailMessage(
                    recipient=recipient,
                    subject=rendered.subject,
                    body_html=rendered.body_html,
                    body_text=rendered.body_text,
                    sender=sender,
                    reply_to=reply_to,
                )
            except EmailValidationError as e:
                return ServiceResult.fail(validation_error("invalid_message", str(e), e.field))

            result = self.email.send(message)
            outcomes[label] = result
            if not result.delivered:
                logger.error("%s %s email to %s failed: %s", kind, label, recipient.email, result.error)
                failures.append(
                    ServiceError(
                        kind="email",
                        code="admin_send_failed" if label == "admin" else "ack_send_failed",
                        message=f"Failed to send {label} email",
                    )
                )

        if failures:
            return ServiceResult.fail(*failures)

        logger.info("Relayed %s submission for %s", kind, sends[1][0].email)
        return ServiceResult.ok(data={label: r.status.value for label, r in outcomes.items()})
