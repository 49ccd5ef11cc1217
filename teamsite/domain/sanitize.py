"""
Free-text sanitizing and format checks for submitted form fields.

These are text filters, not HTML parsers. HTML `content` fields authored by
admins are stored as-is and must not rely on `sanitize` for XSS protection.
"""

import re

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_CHARS = re.compile(r"^[\d+\-()\s]*$")

MIN_PHONE_DIGITS = 7


def _strip_once(text: str) -> str:
    text = _ANGLE_BRACKETS.sub("", text)
    text = _JS_SCHEME.sub("", text)
    return _EVENT_HANDLER.sub("", text)


def sanitize(text: str) -> str:
    """
    Remove angle brackets, `javascript:` schemes and `on<event>=` handlers, then trim.

    Removal repeats until nothing matches, so fragments that join into a new
    match after one pass (e.g. "javajavascript:script:") are also removed.
    """
    previous = None
    while previous != text:
        previous = text
        text = _strip_once(text)
    return text.strip()


def validate_email(value: str) -> bool:
    """Check for a `local@domain.tld` shape. Not a deliverability check."""
    return bool(_EMAIL.match(value or ""))


def validate_phone(value: str) -> bool:
    """Digits, '+', '-', '(', ')' and spaces only, with at least 7 digits."""
    if not value or not _PHONE_CHARS.match(value):
        return False
    return sum(ch.isdigit() for ch in value) >= MIN_PHONE_DIGITS
