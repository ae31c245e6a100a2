"""
Free-text search over resources.

Matching is plain case-insensitive substring containment against the
name, Japanese name, short and long descriptions and the tags. There is
no tokenization, fuzzy matching or ranking, and the order of the input
is preserved.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from .schemas import Resource, SearchMatch


def _normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def _contains(text: Optional[str], needle: str) -> bool:
    return text is not None and needle in text.lower()


def _searchable_texts(resource: Resource) -> Iterator[str]:
    yield resource.name
    if resource.name_ja is not None:
        yield resource.name_ja
    yield resource.description
    if resource.description_long is not None:
        yield resource.description_long
    yield from resource.tags


def _matches(resource: Resource, needle: str) -> bool:
    return any(needle in text.lower() for text in _searchable_texts(resource))


def resource_matches_query(resource: Resource, query: Optional[str]) -> bool:
    """Return ``True`` when ``resource`` contains ``query``.

    A blank query matches every resource.
    """
    needle = _normalize_query(query)
    if not needle:
        return True
    return _matches(resource, needle)


def search_resources(resources: Sequence[Resource], query: Optional[str]) -> List[Resource]:
    """Return the resources matching ``query``.

    Parameters
    ----------
    resources : Sequence[Resource]
        The records to search.
    query : Optional[str]
        Search text. It is trimmed first; a blank query returns every
        record rather than none.

    Returns
    -------
    List[Resource]
        A new list holding exactly the records for which
        ``resource_matches_query`` is true.
    """
    needle = _normalize_query(query)
    if not needle:
        return list(resources)
    return [r for r in resources if _matches(r, needle)]


def get_search_match_locations(resource: Resource, query: Optional[str]) -> SearchMatch:
    """Report which fields of ``resource`` contain ``query`` (for highlighting)."""
    needle = _normalize_query(query)
    if not needle:
        return SearchMatch()
    return SearchMatch(
        name=_contains(resource.name, needle),
        name_ja=_contains(resource.name_ja, needle),
        description=_contains(resource.description, needle),
        description_long=_contains(resource.description_long, needle),
        tags=[t for t in resource.tags if needle in t.lower()],
    )
