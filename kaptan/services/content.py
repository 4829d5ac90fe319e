"""Helpers for authored content."""

from __future__ import annotations

import re

from slugify import slugify

_TAG_RE = re.compile(r"<[^>]+>")

WORDS_PER_MINUTE = 200


def generate_slug(title: str) -> str:
    """Generate a URL-safe slug from a title.

    Turkish letters are transliterated (``Gün Batımı`` -> ``gun-batimi``).
    """
    return slugify(title, max_length=200)


def estimate_read_time(content: str) -> int:
    """Estimated reading time in minutes for HTML content (minimum 1)."""
    text = _TAG_RE.sub(" ", content)
    return max(1, len(text.split()) // WORDS_PER_MINUTE)
