"""
HTML/text templates for relay emails.

Every submitted value is HTML-escaped before it is placed in markup;
newlines in free text become <br>.
"""

from __future__ import annotations

import html

from .models import (
    PASSING_SCORE,
    ApplicationPayload,
    ContactPayload,
    RelayConfig,
    RenderedEmail,
)

_HEADER = (
    '<div style="background: linear-gradient(135deg, #00D4FF, #39FF14); '
    'padding: 20px; text-align: center;">'
    '<h1 style="color: black; margin: 0;">{title}</h1></div>'
)
_PANEL = '<div style="background: white; padding: 15px; margin: 10px 0; border-left: 4px solid #00D4FF;">{body}</div>'
_FOOTNOTE = '<p style="color: #666; font-size: 12px;">{text}</p>'


def _e(value: object) -> str:
    return html.escape("" if value is None else str(value))


def _one_line(value: str) -> str:
    """Header-safe: runs of whitespace, CR/LF included, become one space."""
    return " ".join(value.split())


def _multiline(value: str | None) -> str:
    return _e(value).replace("\n", "<br>")


def _or_na(value: object) -> str:
    return _e(value) if value not in (None, "") else "N/A"


def _layout(title: str, body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        + _HEADER.format(title=_e(title))
        + f'<div style="padding: 20px; background: #f8f9fa;">{body}</div></div>'
    )


def _signature(config: RelayConfig) -> str:
    parts = [f"<p>Best regards,<br><strong>{_e(config.ack_sender_name)}</strong></p>"]
    if config.tagline:
        parts.append(_FOOTNOTE.format(text=_e(config.tagline)))
    return "".join(parts)


def _contact_lines(config: RelayConfig) -> str:
    if not config.contact_lines:
        return ""
    items = "".join(f"<li>{_e(line)}</li>" for line in config.contact_lines)
    return f"<p>If you have any questions, feel free to reach out:</p><ul>{items}</ul>"


def _score_span(score: float) -> str:
    color = "green" if score >= PASSING_SCORE else "red"
    return f'<span style="color: {color}; font-weight: bold;">{_e(score)}%</span>'


# --- Contact ---


def contact_admin(payload: ContactPayload, config: RelayConfig) -> RenderedEmail:
    body = (
        '<h2 style="color: #333;">Contact Details</h2>'
        f"<p><strong>From:</strong> {_e(payload.name)}</p>"
        f"<p><strong>Email:</strong> {_e(payload.email)}</p>"
        f"<p><strong>Subject:</strong> {_e(payload.subject)}</p>"
        '<h3 style="color: #333;">Message:</h3>'
        + _PANEL.format(body=_multiline(payload.message))
        + _FOOTNOTE.format(text=f"This message was sent from the {_e(config.site_name)} contact form.")
    )
    text = (
        f"New contact message\n\nFrom: {payload.name}\nEmail: {payload.email}\n"
        f"Subject: {payload.subject}\n\n{payload.message}\n"
    )
    return RenderedEmail(
        subject=_one_line(f"New Contact Message: {payload.subject}"),
        body_html=_layout("New Contact Message", body),
        body_text=text,
    )


def contact_acknowledgement(payload: ContactPayload, config: RelayConfig) -> RenderedEmail:
    body = (
        f"<p>Hi {_e(payload.name)},</p>"
        f"<p>Thank you for contacting {_e(config.ack_sender_name)}! We've received your "
        "message and will get back to you within 24 hours.</p>"
        + _PANEL.format(
            body=(
                '<h3 style="margin-top: 0;">Your Message:</h3>'
                f"<p><strong>Subject:</strong> {_e(payload.subject)}</p>"
                f"<p>{_multiline(payload.message)}</p>"
            )
        )
        + _contact_lines(config)
        + _signature(config)
    )
    text = (
        f"Hi {payload.name},\n\nThank you for contacting {config.ack_sender_name}! "
        "We've received your message and will get back to you within 24 hours.\n\n"
        f"Subject: {payload.subject}\n{payload.message}\n"
    )
    return RenderedEmail(
        subject=_one_line(f"Thank you for contacting {config.site_name}"),
        body_html=_layout("Thank You for Reaching Out!", body),
        body_text=text,
    )


# --- Application ---


def application_admin(payload: ApplicationPayload, config: RelayConfig) -> RenderedEmail:
    info = payload.personal_info
    sections = [
        '<h2 style="color: #333;">Applicant Information</h2>',
        _PANEL.format(
            body=(
                f"<p><strong>Name:</strong> {_e(info.full_name)}</p>"
                f"<p><strong>Email:</strong> {_e(info.email)}</p>"
                f"<p><strong>Phone:</strong> {_or_na(info.phone)}</p>"
                f"<p><strong>College:</strong> {_or_na(info.college)}</p>"
                f"<p><strong>Branch:</strong> {_or_na(info.branch)}</p>"
                f"<p><strong>Year:</strong> {_or_na(info.year)}</p>"
                f"<p><strong>Preferred Role:</strong> {_or_na(info.preferred_role)}</p>"
            )
        ),
    ]
    quiz = payload.quiz_results
    if quiz is not None:
        verdict = "PASSED" if quiz.passed else "FAILED"
        sections.append('<h3 style="color: #333;">Quiz Results</h3>')
        sections.append(
            _PANEL.format(
                body=(
                    f"<p><strong>Score:</strong> {_score_span(quiz.score)}</p>"
                    f"<p><strong>Correct Answers:</strong> {quiz.correct_answers}/{quiz.total_questions}</p>"
                    f"<p><strong>Status:</strong> {verdict}</p>"
                    f"<p><strong>Time Spent:</strong> {quiz.time_spent // 60} minutes</p>"
                )
            )
        )
    if info.experience:
        sections.append('<h3 style="color: #333;">Experience &amp; Skills</h3>')
        sections.append(_PANEL.format(body=_multiline(info.experience)))
    sections.append('<h3 style="color: #333;">Motivation</h3>')
    sections.append(_PANEL.format(body=_multiline(info.motivation) if info.motivation else "N/A"))
    slot = payload.interview_slot
    if slot is not None:
        sections.append('<h3 style="color: #333;">Interview Scheduled</h3>')
        sections.append(
            _PANEL.format(
                body=(
                    f"<p><strong>Date:</strong> {_e(slot.date)}</p>"
                    f"<p><strong>Time:</strong> {_e(slot.time)}</p>"
                    f"<p><strong>Mode:</strong> {_e(slot.mode)}</p>"
                )
            )
        )
    sections.append(
        _FOOTNOTE.format(text=f"This application was submitted through the {_e(config.site_name)} website.")
    )

    text_lines = [
        "New team application",
        "",
        f"Name: {info.full_name}",
        f"Email: {info.email}",
        f"Phone: {info.phone or 'N/A'}",
        f"Preferred Role: {info.preferred_role or 'N/A'}",
    ]
    if quiz is not None:
        text_lines.append(f"Quiz Score: {quiz.score}%")
    return RenderedEmail(
        subject=_one_line(f"New Team Application - {info.full_name}"),
        body_html=_layout("New Team Application", "".join(sections)),
        body_text="\n".join(text_lines) + "\n",
    )


def application_acknowledgement(
    payload: ApplicationPayload,
    config: RelayConfig,
    submitted_on: str,
) -> RenderedEmail:
    info = payload.personal_info
    quiz = payload.quiz_results
    summary = (
        '<h3 style="margin-top: 0;">Application Summary:</h3>'
        f"<p><strong>Applied Role:</strong> {_or_na(info.preferred_role)}</p>"
        f"<p><strong>Submission Date:</strong> {_e(submitted_on)}</p>"
    )
    if quiz is not None:
        summary += f"<p><strong>Quiz Score:</strong> {_score_span(quiz.score)}</p>"

    body = (
        f"<p>Hi {_e(info.full_name)},</p>"
        f"<p>Thank you for applying to join {_e(config.ack_sender_name)}! We've received "
        "your application and will review it shortly.</p>"
        + _PANEL.format(body=summary)
        + '<h3 style="color: #333;">Next Steps:</h3><ul>'
        "<li>Application submitted successfully</li>"
        "<li>We'll review your application and quiz results</li>"
        "<li>If selected, we'll contact you for an interview</li>"
        "<li>Final selection will be communicated via email</li></ul>"
    )
    if quiz is not None and quiz.score < PASSING_SCORE:
        body += (
            '<div style="background: #fff3cd; border: 1px solid #ffeaa7; padding: 15px;">'
            f"<p><strong>Note:</strong> Your quiz score is below the minimum requirement "
            f"({PASSING_SCORE}%). You may retake the quiz after 24 hours or contact us for "
            "guidance.</p></div>"
        )
    body += _contact_lines(config) + _signature(config)

    text = (
        f"Hi {info.full_name},\n\nThank you for applying to join {config.ack_sender_name}! "
        "We've received your application and will review it shortly.\n\n"
        f"Applied Role: {info.preferred_role or 'N/A'}\nSubmission Date: {submitted_on}\n"
    )
    return RenderedEmail(
        subject=_one_line(f"Application Received - {config.site_name}"),
        body_html=_layout("Application Received!", body),
        body_text=text,
    )
