"""
Notification relay models.

Payload models are deliberately looser than the stored documents: the relay
needs only what the templates print, and checks just the fields each kind
cannot do without.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from teamsite.core.ports.email import EmailAddress

RelayKind = Literal["contact", "application"]
RELAY_KINDS: tuple[str, ...] = ("contact", "application")

PASSING_SCORE = 70


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ContactPayload(_Payload):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ApplicantInfo(_Payload):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str | None = None
    college: str | None = None
    branch: str | None = None
    year: str | int | None = None
    preferred_role: str | None = None
    experience: str | None = None
    motivation: str | None = None


class QuizSummary(_Payload):
    score: float = 0
    correct_answers: int = 0
    total_questions: int = 0
    passed: bool = False
    time_spent: int = 0


class InterviewSummary(_Payload):
    date: str = ""
    time: str = ""
    mode: str = ""


class ApplicationPayload(_Payload):
    personal_info: ApplicantInfo
    quiz_results: QuizSummary | None = None
    interview_slot: InterviewSummary | None = None


@dataclass(frozen=True)
class RelayConfig:
    """Addresses and copy used by the templates."""

    admin_inbox: str
    sender_email: str
    site_name: str = "Team Site"
    sender_name: str = "Team Site Website"
    ack_sender_name: str = "Team Site"
    tagline: str = ""
    contact_lines: tuple[str, ...] = field(default_factory=tuple)

    @property
    def admin_sender(self) -> EmailAddress:
        return EmailAddress(self.sender_email, self.sender_name)

    @property
    def ack_sender(self) -> EmailAddress:
        return EmailAddress(self.sender_email, self.ack_sender_name)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    body_html: str
    body_text: str
