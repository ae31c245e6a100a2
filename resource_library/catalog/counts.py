"""
Resource counts for navigation badges and filter panels.

Counts are always derived from the record collection passed in; nothing
here keeps state between calls, so a decoration can be checked against
a fresh recount with ``validate_category_counts``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from .schemas import (
    DIFFICULTY_LEVELS,
    PLATFORMS,
    PRICE_TYPES,
    Category,
    CategoryWithCount,
    FilterOption,
    FilterOptions,
    Resource,
    SubcategoryWithCount,
)


def get_category_resource_counts(resources: Sequence[Resource]) -> Dict[str, int]:
    """Map each category id present in ``resources`` to its record count.

    The values always sum to ``len(resources)``; categories without any
    record are absent from the mapping.
    """
    return dict(Counter(r.category for r in resources))


def get_subcategory_resource_counts(resources: Sequence[Resource], category_id: str) -> Dict[str, int]:
    """Map subcategory ids of ``category_id`` to their record counts."""
    return dict(Counter(r.subcategory for r in resources if r.category == category_id))


def get_resource_count_for_category(resources: Sequence[Resource], category_id: str) -> int:
    return sum(1 for r in resources if r.category == category_id)


def get_resource_count_for_subcategory(
    resources: Sequence[Resource],
    category_id: str,
    subcategory_id: str,
) -> int:
    return sum(1 for r in resources if r.category == category_id and r.subcategory == subcategory_id)


def get_total_resource_count(resources: Sequence[Resource]) -> int:
    return len(resources)


def enrich_categories_with_counts(
    categories: Sequence[Category],
    resources: Sequence[Resource],
) -> List[CategoryWithCount]:
    """Decorate each category and subcategory with a ``resource_count``.

    Counts are recomputed from ``resources`` on every call.

    Parameters
    ----------
    categories : Sequence[Category]
        Taxonomy to decorate. Its order is kept.
    resources : Sequence[Resource]
        The current record collection.

    Returns
    -------
    List[CategoryWithCount]
        New decorated copies; the input categories are not modified.
    """
    category_counts = get_category_resource_counts(resources)
    enriched: List[CategoryWithCount] = []
    for category in categories:
        sub_counts = get_subcategory_resource_counts(resources, category.id)
        subcategories = [
            SubcategoryWithCount(**sub.model_dump(), resource_count=sub_counts.get(sub.id, 0))
            for sub in category.subcategories
        ]
        enriched.append(
            CategoryWithCount(
                **category.model_dump(),
                resource_count=category_counts.get(category.id, 0),
                subcategories_with_count=subcategories,
            )
        )
    return enriched


def validate_category_counts(
    categories: Sequence[CategoryWithCount],
    resources: Sequence[Resource],
) -> bool:
    """Check every decorated count against an independent recount."""
    for category in categories:
        expected = sum(1 for r in resources if r.category == category.id)
        if category.resource_count != expected:
            return False
        for sub in category.subcategories_with_count:
            expected_sub = sum(
                1 for r in resources if r.category == category.id and r.subcategory == sub.id
            )
            if sub.resource_count != expected_sub:
                return False
    return True


def get_filter_options(resources: Sequence[Resource]) -> FilterOptions:
    """Count resources for every difficulty level, price type and platform.

    A resource listing several platforms is counted once under each of
    them, so platform counts may add up to more than ``len(resources)``.
    """
    difficulties = Counter(r.difficulty for r in resources)
    price_types = Counter(r.price_type for r in resources)
    platforms = Counter(p for r in resources for p in set(r.platforms))
    return FilterOptions(
        difficulties=[FilterOption(value=v, count=difficulties[v]) for v in DIFFICULTY_LEVELS],
        price_types=[FilterOption(value=v, count=price_types[v]) for v in PRICE_TYPES],
        platforms=[FilterOption(value=v, count=platforms[v]) for v in PLATFORMS],
    )
