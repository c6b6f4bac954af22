"""
URL slug generation for project titles.
"""

import re
import uuid

SLUG_TITLE_LENGTH = 18
SLUG_SUFFIX_LENGTH = 6

_unsafe_chars = re.compile(r"[^a-z0-9 ]+")
_spaces = re.compile(r" +")


def to_slug(title: str) -> str:
    """Build a slug from the first characters of ``title`` plus a random suffix.

    ``"My First Project!"`` becomes something like ``"my-first-project-1f3a9c"``.
    When nothing survives sanitizing, the suffix alone is returned.
    """
    identifier = str(uuid.uuid4())[:SLUG_SUFFIX_LENGTH]

    base = title[:SLUG_TITLE_LENGTH].lower()
    base = _unsafe_chars.sub("", base)
    base = _spaces.sub("-", base)
    base = base.strip("-")

    if not base:
        return identifier

    return f"{base}-{identifier}"
