"""
Predicate filters over a resource collection.

Every function here is pure: it takes a sequence of ``Resource``
records and returns a new list, leaving the input untouched. Lookups
that match nothing give an empty list; an empty selector (no difficulty
levels, no price types, no platforms) means "no constraint" and keeps
every record.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from .schemas import ActiveFilters, Resource


def filter_by_category(resources: Sequence[Resource], category: str) -> List[Resource]:
    """Keep resources whose ``category`` equals ``category``."""
    return [r for r in resources if r.category == category]


def filter_by_subcategory(resources: Sequence[Resource], subcategory: str) -> List[Resource]:
    """Keep resources whose ``subcategory`` equals ``subcategory``.

    The parent category is not checked; use
    ``filter_by_category_and_subcategory`` to scope to one category.
    """
    return [r for r in resources if r.subcategory == subcategory]


def filter_by_category_and_subcategory(
    resources: Sequence[Resource],
    category: str,
    subcategory: str,
) -> List[Resource]:
    return [r for r in resources if r.category == category and r.subcategory == subcategory]


def filter_by_difficulty(resources: Sequence[Resource], difficulties: Sequence[str]) -> List[Resource]:
    """Keep resources at any of the given difficulty levels."""
    if not difficulties:
        return list(resources)
    wanted = set(difficulties)
    return [r for r in resources if r.difficulty in wanted]


def filter_by_price_type(resources: Sequence[Resource], price_types: Sequence[str]) -> List[Resource]:
    """Keep resources with any of the given price types."""
    if not price_types:
        return list(resources)
    wanted = set(price_types)
    return [r for r in resources if r.price_type in wanted]


def filter_by_platform(resources: Sequence[Resource], platforms: Sequence[str]) -> List[Resource]:
    """Keep resources available on at least one of the given platforms."""
    if not platforms:
        return list(resources)
    wanted = set(platforms)
    return [r for r in resources if wanted.intersection(r.platforms)]


# (ActiveFilters attribute, filter) pairs applied by ``combine_filters``.
# Each filter only narrows by its own field, so the order is irrelevant
# to the result.
FILTER_DIMENSIONS: Tuple[Tuple[str, Callable[[Sequence[Resource], Sequence[str]], List[Resource]]], ...] = (
    ("difficulty", filter_by_difficulty),
    ("price_type", filter_by_price_type),
    ("platforms", filter_by_platform),
)


def combine_filters(resources: Sequence[Resource], filters: ActiveFilters) -> List[Resource]:
    """Apply every non-empty filter dimension of ``filters`` (AND logic).

    The free-text ``search`` field is not applied here; compose
    ``search.search_resources`` before or after this call.

    Parameters
    ----------
    resources : Sequence[Resource]
        The records to filter.
    filters : ActiveFilters
        Current selections. Values within one dimension are OR-ed.

    Returns
    -------
    List[Resource]
        Records satisfying every active dimension, in input order.
    """
    result = list(resources)
    for attr, apply_filter in FILTER_DIMENSIONS:
        selected = getattr(filters, attr)
        if selected:
            result = apply_filter(result, selected)
    return result


def create_empty_filters() -> ActiveFilters:
    return ActiveFilters()


def has_active_filters(filters: ActiveFilters) -> bool:
    """Return ``True`` when any selection or a non-blank search is set."""
    return bool(
        filters.difficulty
        or filters.price_type
        or filters.platforms
        or filters.search.strip()
    )
