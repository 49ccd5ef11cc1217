import re

_DISALLOWED = re.compile(r"[^a-z0-9\- ]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a human title.

    Used by both create and update paths so a title always maps to the
    same slug. May return "" for titles without any [a-z0-9] characters.
    """
    slug = (title or "").lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
