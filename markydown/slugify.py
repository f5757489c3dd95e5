"""Slug generation for heading anchors."""

from __future__ import annotations

import re
import string
import unicodedata


def generate_slug(title: str, preserve_unicode: bool = False) -> str:
    """Generate a URL-style slug from the plain text of a heading.

    Lowercases the title (transliterated to ASCII unless `preserve_unicode`),
    drops punctuation other than hyphens and underscores, and joins words
    with single hyphens.

    Args:
        title: Heading text to convert into a slug.
        preserve_unicode: When True, retain Unicode characters instead of
            transliterating to ASCII.

    Returns:
        str: Hyphen-separated slug, or ``"untitled"`` when nothing remains.

    Examples:
        generate_slug("Hello World")  # "hello-world"
        generate_slug("What's New?")  # "whats-new"
        generate_slug("Café", preserve_unicode=True)  # "café"
    """
    punctuation = string.punctuation.replace("-", "").replace("_", "")

    normalized = unicodedata.normalize("NFKC" if preserve_unicode else "NFKD", title)
    if preserve_unicode:
        slug = normalized
    else:
        slug = normalized.encode("ascii", "ignore").decode("utf-8", "ignore")

    slug = slug.casefold()
    slug = slug.translate(str.maketrans("", "", punctuation))

    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")

    return slug if slug else "untitled"


class SlugRegistry:
    """Hand out document-unique slugs, numbering duplicates GitHub-style.

    ``"Header"``, ``"Header"``, ``"Header 1"`` yield ``header``,
    ``header-1`` and ``header-1-1``: the third base slug collides with the
    numbered duplicate, so it is numbered in turn.

    Examples:
        registry = SlugRegistry()
        registry.unique_slug("Intro")  # "intro"
        registry.unique_slug("Intro")  # "intro-1"
    """

    def __init__(self, preserve_unicode: bool = False):
        self.preserve_unicode = preserve_unicode
        # Next counter per base slug, plus every slug handed out so far
        self._counters: dict[str, int] = {}
        self._used: set[str] = set()

    def unique_slug(self, title: str) -> str:
        base_slug = generate_slug(title, preserve_unicode=self.preserve_unicode)

        count = self._counters.get(base_slug, 0)
        slug = base_slug if count == 0 else f"{base_slug}-{count}"
        while slug in self._used:
            count += 1
            slug = f"{base_slug}-{count}"

        self._counters[base_slug] = count + 1
        self._used.add(slug)
        return slug
