"""
Slugs - URL-safe identifiers for properties.

Two pieces:
- normalize(): pure name -> slug function
- SlugAllocator: makes a slug unique against a collection by probing
  base, base-1, base-2, ... until an unused candidate is found

The allocator only asks "does this candidate exist?" through a callable,
so it knows nothing about storage.
"""

from __future__ import annotations

import logging
import re
from typing import Awaitable, Callable

from onestay.core.errors import SlugAllocationError

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 100

# Used when a name normalizes to nothing (e.g. only emoji)
EMPTY_SLUG_FALLBACK = "property"

ACCENTS: dict[str, str] = {
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
    "è": "e", "é": "e", "ê": "e", "ë": "e",
    "ì": "i", "í": "i", "î": "i", "ï": "i",
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o",
    "ù": "u", "ú": "u", "û": "u", "ü": "u",
    "ý": "y", "ÿ": "y",
    "ç": "c",
    "ñ": "n",
}

# Elision marks separate words ("l'été" -> "l ete")
APOSTROPHES = frozenset("'’")

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")

ExistsFn = Callable[[str], Awaitable[bool]]


# =============================================================================
# Normalization
# =============================================================================


def _replace_accents(value: str) -> str:
    chars = []
    for ch in value:
        if ch in ACCENTS:
            chars.append(ACCENTS[ch])
        elif ch in APOSTROPHES:
            chars.append(" ")
        elif ch.isalnum() or ch.isspace() or ch == "-":
            chars.append(ch)
    return "".join(chars)


def normalize(name: str) -> str:
    """
    Convert a display name into a URL-safe slug.

    Steps:
    1. lowercase
    2. replace accented latin letters with their base letter
    3. drop anything that isn't a letter, digit, whitespace or hyphen
    4. collapse every run of non [a-z0-9] characters into one hyphen
    5. trim hyphens
    6. cap at 100 characters, trimming a hyphen left dangling by the cut

    >>> normalize("Café de l'Été")
    'cafe-de-l-ete'
    >>> normalize("  Multiple   Spaces!! ")
    'multiple-spaces'
    """
    slug = _replace_accents(name.lower())
    slug = _NON_SLUG_RUN.sub("-", slug).strip("-")

    if len(slug) > MAX_SLUG_LENGTH:
        slug = slug[:MAX_SLUG_LENGTH].strip("-")

    return slug


def with_suffix(base: str, counter: int) -> str:
    return f"{base}-{counter}"


# =============================================================================
# Allocation
# =============================================================================


class SlugAllocator:
    """
    Allocate unique slugs by probing and suffixing.

    Usage:
        allocator = SlugAllocator(max_attempts=1000)
        slug = await allocator.allocate("Villa Soleil", repo.exists_by_slug)
        # "villa-soleil", or "villa-soleil-1" if taken, ...

    The probe is not atomic with the insert that follows it. Storage
    enforces a unique index on the slug; callers retry allocation when the
    insert reports a duplicate key.
    """

    def __init__(self, max_attempts: int = 1000, fallback: str = EMPTY_SLUG_FALLBACK):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.fallback = fallback

    def base_for(self, name: str) -> str:
        return normalize(name) or self.fallback

    async def allocate(self, name: str, exists: ExistsFn) -> str:
        """Return the first unused slug in base, base-1, base-2, ..."""
        return await self._probe(self.base_for(name), exists, current_slug=None)

    async def reallocate(self, name: str, exists: ExistsFn, current_slug: str) -> str:
        """
        Recompute the slug of an already persisted entity.

        Same probe sequence as allocate(), but the entity's current slug
        counts as free: renaming to a name that lands on the current slug
        keeps it instead of forcing a new suffix.
        """
        return await self._probe(self.base_for(name), exists, current_slug=current_slug)

    async def _probe(self, base: str, exists: ExistsFn, current_slug: str | None) -> str:
        candidate = base
        counter = 1

        for _ in range(self.max_attempts):
            if candidate == current_slug:
                return candidate
            if not await exists(candidate):
                return candidate

            logger.debug("Slug %r already taken", candidate)
            candidate = with_suffix(base, counter)
            counter += 1

        logger.error("Gave up allocating a slug for base %r after %d attempts", base, self.max_attempts)
        raise SlugAllocationError(f"Could not allocate a unique slug for {base!r}")
