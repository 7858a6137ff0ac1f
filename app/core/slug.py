"""URL slug helpers for usernames and public event pages."""

import re
from typing import Awaitable, Callable

_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def generate_slug(text: str) -> str:
    """Lowercase ``text`` and collapse it to dash-separated word characters."""
    slug = text.lower().strip()
    slug = _STRIP.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


async def generate_unique_slug(
    text: str,
    exists: Callable[[str], Awaitable[bool]],
) -> str:
    """Return the first of ``slug``, ``slug-1``, ``slug-2``... not taken."""
    base_slug = generate_slug(text)
    slug = base_slug
    counter = 1

    while await exists(slug):
        slug = f"{base_slug}-{counter}"
        counter += 1

    return slug
