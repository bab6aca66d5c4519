"""
App identifier normalisation.

Clients refer to an app by its display name, its slug or a loosely typed
variant of either ("Widget Pro", "widget-pro", "WIDGETPRO").
"""

import re
from typing import Callable, Iterable, List, Optional, TypeVar

SLUG_MAX_LENGTH = 120

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")

T = TypeVar("T")


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to ``-``, trim dashes, cut to 120."""
    slug = _NON_SLUG.sub("-", value.strip().lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH]


def compact(value: str) -> str:
    """Lowercase alphanumerics only."""
    return _NON_ALNUM.sub("", value.strip().lower())


def match_rules(identifier: str) -> List[Callable[[str, str], bool]]:
    """
    Predicates over ``(name, slug)`` in priority order.

    Exact name, case-insensitive name, exact slug, slug of the input,
    compacted name.
    """
    normalized = identifier.strip()
    lowered = normalized.lower()
    slug_candidate = slugify(normalized)
    compacted = compact(normalized)
    return [
        lambda name, slug: name.strip() == normalized,
        lambda name, slug: name.strip().lower() == lowered,
        lambda name, slug: slug.strip() == normalized,
        lambda name, slug: bool(slug_candidate) and slug.strip() == slug_candidate,
        lambda name, slug: bool(compacted) and compact(name) == compacted,
    ]


def resolve_identifier(
    identifier: str,
    candidates: Iterable[T],
    name_of: Callable[[T], str],
    slug_of: Callable[[T], str],
) -> Optional[T]:
    """
    Pick the candidate an identifier refers to.

    Every candidate is tried against the strongest rule before any
    weaker rule is considered, so an exact match always wins.

    Args:
        identifier: Raw client input
        candidates: Apps to search
        name_of: Returns a candidate's name
        slug_of: Returns a candidate's slug

    Returns:
        Matching candidate or None
    """
    if not identifier or not identifier.strip():
        return None
    pool = list(candidates)
    for rule in match_rules(identifier):
        for candidate in pool:
            if rule(name_of(candidate), slug_of(candidate)):
                return candidate
    return None
