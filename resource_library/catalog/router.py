"""
Route definitions for the resource catalogue API.

Endpoints under /api/resources:
- GET  /                                        : list resources with search + filters
- GET  /filters                                 : filter options with counts
- GET  /featured                                : featured resources
- GET  /categories                              : taxonomy with resource counts
- GET  /categories/{category_id}                : one category with counts
- GET  /categories/{category_id}/{subcategory}  : resources of one subcategory
- POST /validate                                : batch-validate raw records
- GET  /{resource_id}                           : one resource
- GET  /{resource_id}/related                   : related resources
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from .counts import get_filter_options
from .filters import combine_filters, filter_by_category, filter_by_subcategory
from .schemas import (
    ActiveFilters,
    CategoryWithCount,
    DifficultyLevel,
    FilterOptions,
    PaginatedResources,
    Platform,
    PriceType,
    Resource,
)
from .search import search_resources
from .store import ResourceStore
from .validation import ValidationReport, validate_resources


router = APIRouter(prefix="/api/resources", tags=["resources"])


def get_store(request: Request) -> ResourceStore:
    """Resolve the resource store from app state."""
    return request.app.state.store  # type: ignore[attr-defined]


def _page_size_limits(request: Request) -> tuple:
    settings = request.app.state.settings  # type: ignore[attr-defined]
    return settings.default_page_size, settings.max_page_size


@router.get("", response_model=PaginatedResources)
def list_resources(
    request: Request,
    q: Optional[str] = Query(default=None, description="Free-text search"),
    category: Optional[str] = Query(default=None, description="Category id"),
    subcategory: Optional[str] = Query(default=None, description="Subcategory id"),
    difficulty: List[DifficultyLevel] = Query(default=[], description="Difficulty levels (repeatable)"),
    price_type: List[PriceType] = Query(default=[], alias="priceType", description="Price types (repeatable)"),
    platform: List[Platform] = Query(default=[], description="Platforms (repeatable)"),
    featured: Optional[bool] = Query(default=None, description="Only featured resources"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: Optional[int] = Query(default=None, alias="pageSize", ge=1, description="Page size"),
    store: ResourceStore = Depends(get_store),
) -> PaginatedResources:
    """
    Returns a paginated list of resources.

    - Scope by category / subcategory first.
    - Then free-text search, then the difficulty / price / platform filters.
    - total/total_pages are computed after filtering.
    """
    default_size, max_size = _page_size_limits(request)
    size = min(page_size or default_size, max_size)

    # 1) Scope
    items: List[Resource] = list(store.resources())
    if category:
        items = filter_by_category(items, category)
    if subcategory:
        items = filter_by_subcategory(items, subcategory)
    if featured is not None:
        items = [r for r in items if bool(r.featured) is featured]

    # 2) Search, then the dimension filters
    filters = ActiveFilters(difficulty=difficulty, price_type=price_type, platforms=platform, search=q or "")
    items = search_resources(items, filters.search)
    items = combine_filters(items, filters)

    # 3) Pagination metadata AFTER filters
    total = len(items)
    total_pages = max(1, (total + size - 1) // size)
    page = min(max(1, page), total_pages)
    start = (page - 1) * size

    return PaginatedResources(
        page=page,
        page_size=size,
        total=total,
        total_pages=total_pages,
        items=items[start:start + size],
    )


@router.get("/filters", response_model=FilterOptions)
def list_filter_options(
    category: Optional[str] = Query(default=None, description="Restrict counts to a category"),
    store: ResourceStore = Depends(get_store),
) -> FilterOptions:
    resources = store.resources_by_category(category) if category else store.resources()
    return get_filter_options(resources)


@router.get("/featured", response_model=List[Resource])
def list_featured(
    category: Optional[str] = Query(default=None, description="Restrict to a category"),
    store: ResourceStore = Depends(get_store),
) -> List[Resource]:
    return store.featured_resources(category)


@router.get("/categories", response_model=List[CategoryWithCount])
def list_categories(store: ResourceStore = Depends(get_store)) -> List[CategoryWithCount]:
    return store.categories_with_counts()


@router.get("/categories/{category_id}", response_model=CategoryWithCount)
def get_category(category_id: str, store: ResourceStore = Depends(get_store)) -> CategoryWithCount:
    for category in store.categories_with_counts():
        if category.id == category_id:
            return category
    raise HTTPException(status_code=404, detail="Category not found")


@router.get("/categories/{category_id}/{subcategory_id}", response_model=List[Resource])
def list_subcategory_resources(
    category_id: str,
    subcategory_id: str,
    store: ResourceStore = Depends(get_store),
) -> List[Resource]:
    if store.get_subcategory(category_id, subcategory_id) is None:
        raise HTTPException(status_code=404, detail="Subcategory not found")
    return store.resources_by_subcategory(category_id, subcategory_id)


@router.post("/validate", response_model=ValidationReport)
def validate_records(records: List[Any] = Body(...)) -> ValidationReport:
    """Validate raw resource records without loading them.

    Every entry is checked; the report lists only the failing ones.
    """
    return validate_resources(records)


@router.get("/{resource_id}", response_model=Resource)
def get_resource(resource_id: str, store: ResourceStore = Depends(get_store)) -> Resource:
    resource = store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.get("/{resource_id}/related", response_model=List[Resource])
def get_related(
    resource_id: str,
    limit: int = Query(default=4, ge=1, le=20),
    store: ResourceStore = Depends(get_store),
) -> List[Resource]:
    resource = store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return store.related_resources(resource, limit=limit)
