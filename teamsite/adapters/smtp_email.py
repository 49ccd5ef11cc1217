"""
SMTP Email Adapter (P4 Implementation).

Sends transactional mail through an authenticated SMTP server (implicit TLS
on 465 by default, STARTTLS otherwise). Each send opens its own connection;
there is no pooling and no retry.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage as MimeMessage
from email.utils import make_msgid

from teamsite.core.ports.email import EmailAddress, EmailMessage, EmailResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int = 465
    username: str = ""
    password: str = ""
    use_ssl: bool = True
    timeout_seconds: float = 30.0


class SMTPEmailAdapter:
    def __init__(self, config: SMTPConfig, default_sender: EmailAddress):
        self.config = config
        self.default_sender = default_sender

    def _build(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["From"] = str(message.sender or self.default_sender)
        mime["To"] = str(message.recipient)
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        if message.reply_to:
            mime["Reply-To"] = str(message.reply_to)
        for name, value in message.headers.items():
            mime[name] = value

        mime.set_content(message.body_text or "This message requires an HTML-capable client.")
        if message.body_html:
            mime.add_alternative(message.body_html, subtype="html")
        return mime

    def _connect(self) -> smtplib.SMTP:
        cfg = self.config
        if cfg.use_ssl:
            return smtplib.SMTP_SSL(
                cfg.host,
                cfg.port,
                timeout=cfg.timeout_seconds,
                context=ssl.create_default_context(),
            )
        client = smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout_seconds)
        try:
            client.starttls(context=ssl.create_default_context())
        except (smtplib.SMTPException, OSError):
            client.close()
            raise
        return client

    def send(self, message: EmailMessage) -> EmailResult:
        recipient = message.recipient.email
        try:
            mime = self._build(message)
        except ValueError as e:
            # Header values with CR/LF are refused by the email package
            logger.error("Invalid message for %s: %s", recipient, e)
            return EmailResult.failed(recipient, "invalid_message")

        try:
            with self._connect() as client:
                if self.config.username:
                    client.login(self.config.username, self.config.password)
                client.send_message(mime)
        except smtplib.SMTPAuthenticationError:
            logger.error("SMTP authentication failed for %s", self.config.username)
            return EmailResult.failed(recipient, "auth_failed")
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send to %s failed: %s", recipient, e)
            return EmailResult.failed(recipient, "transport_failed")

        return EmailResult.success(recipient, message_id=str(mime["Message-ID"]))
