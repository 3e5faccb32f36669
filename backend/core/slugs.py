# core/slugs.py
"""
URL-safe slug allocation.

Company slugs and job slugs live in separate namespaces; the caller
passes an ``exists`` callback bound to the right repository.

Allocation is best effort: on a collision a random suffix is appended
and NOT re-checked. The store's unique constraint is the authority, and
a missed second collision surfaces as a ConflictError from the insert.
"""

import logging
import unicodedata
from typing import Callable

from django.utils.crypto import get_random_string
from django.utils.text import slugify

from core.errors import InvalidInputError

logger = logging.getLogger(__name__)

SUFFIX_LENGTH = 5
SUFFIX_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


def normalize(candidate_name: str) -> str:
    """Lowercase, hyphenated, ASCII-only token for ``candidate_name``."""
    folded = (
        unicodedata.normalize("NFKD", candidate_name or "")
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    return slugify(folded)


def random_suffix() -> str:
    return get_random_string(SUFFIX_LENGTH, allowed_chars=SUFFIX_CHARS)


def allocate(candidate_name: str, exists: Callable[[str], bool]) -> str:
    """
    Allocate a slug for ``candidate_name``.

    Args:
        candidate_name: Human name of the entity (company name, job title)
        exists: Namespace-scoped lookup, ``exists(slug) -> bool``

    Returns:
        The normalized name, or the normalized name plus ``-xxxxx`` when
        the normalized name is already taken.

    Raises:
        InvalidInputError: If nothing URL-safe is left after normalization
    """
    slug = normalize(candidate_name)
    if not slug:
        raise InvalidInputError(
            f"Cannot build a slug from {candidate_name!r}: name has no URL-safe characters."
        )

    if not exists(slug):
        return slug

    suffixed = f"{slug}-{random_suffix()}"
    logger.debug("Slug collision", extra={"slug": slug, "allocated": suffixed})
    return suffixed
