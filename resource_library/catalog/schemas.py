"""
Pydantic schema definitions for the resource catalogue.

The ``Resource`` model captures one entry of the learning-resource
directory. Taxonomy nodes (``Category`` / ``Subcategory``) come from
``categories.json`` and are decorated with live counts by the
``counts`` module. Attribute names are snake_case in Python while the
JSON data files and API responses use camelCase, so every model shares
a camelCase alias generator.

The enumerations are closed ``Literal`` types. Each one also has an
ordered tuple of its members and an ``is_valid_*`` guard so that raw,
untrusted values (query strings, data files awaiting validation) can be
checked with a plain membership test.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated, Literal, get_args


DifficultyLevel = Literal["beginner", "intermediate", "advanced", "all-levels"]

PriceType = Literal["free", "freemium", "paid", "subscription"]

Platform = Literal[
    "web",
    "ios",
    "android",
    "windows",
    "macos",
    "linux",
    "physical",
    "browser-extension",
    "api",
]

CategoryId = Literal[
    "apps",
    "websites",
    "textbooks",
    "youtube",
    "podcasts",
    "games",
    "jlpt",
    "reading",
    "listening",
    "speaking",
    "writing",
    "grammar",
    "vocabulary",
    "kanji",
    "immersion",
    "community",
]

DIFFICULTY_LEVELS: Tuple[str, ...] = get_args(DifficultyLevel)
PRICE_TYPES: Tuple[str, ...] = get_args(PriceType)
PLATFORMS: Tuple[str, ...] = get_args(Platform)
CATEGORY_IDS: Tuple[str, ...] = get_args(CategoryId)


def is_valid_difficulty(value: Any) -> bool:
    return isinstance(value, str) and value in DIFFICULTY_LEVELS


def is_valid_price_type(value: Any) -> bool:
    return isinstance(value, str) and value in PRICE_TYPES


def is_valid_platform(value: Any) -> bool:
    return isinstance(value, str) and value in PLATFORMS


def is_valid_category_id(value: Any) -> bool:
    return isinstance(value, str) and value in CATEGORY_IDS


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Resource(CamelModel):
    """A single learning resource entry.

    Records are frozen once loaded; filters and searches always build
    new lists instead of touching a record. ``tags`` and ``platforms``
    are tuples and must not be empty. Optional fields default to
    ``None`` and callers test them with ``is not None``.
    """

    model_config = ConfigDict(frozen=True)

    id: NonBlankStr
    name: NonBlankStr
    name_ja: Optional[str] = None
    description: NonBlankStr
    description_long: Optional[str] = None
    category: CategoryId
    subcategory: NonBlankStr
    tags: Tuple[NonBlankStr, ...] = Field(min_length=1)
    difficulty: DifficultyLevel
    price_type: PriceType
    # Free text such as "$9.99/month" or "Free with ads".
    price_details: Optional[str] = None
    platforms: Tuple[Platform, ...] = Field(min_length=1)
    url: NonBlankStr
    image_url: Optional[str] = None
    # Strict: "4" or "yes" in a data file is an error, not a coercion.
    rating: Optional[float] = Field(default=None, strict=True, ge=1, le=5)
    featured: Optional[StrictBool] = None
    notes: Optional[str] = None
    # ISO date, kept as text.
    last_updated: Optional[str] = None


class Subcategory(CamelModel):
    """A subcategory; ``parent_category`` points back at its owner."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_ja: str = ""
    description: str = ""
    description_long: str = ""
    parent_category: CategoryId


class Category(CamelModel):
    """A top-level category with its ordered subcategories."""

    model_config = ConfigDict(frozen=True)

    id: CategoryId
    name: str
    name_ja: str = ""
    description: str = ""
    description_long: str = ""
    icon: str = ""
    subcategories: List[Subcategory] = Field(default_factory=list)
    order: int = 0


class SubcategoryWithCount(Subcategory):
    resource_count: int


class CategoryWithCount(Category):
    """A category decorated with counts derived from a record collection."""

    resource_count: int
    subcategories_with_count: List[SubcategoryWithCount] = Field(default_factory=list)


class ActiveFilters(CamelModel):
    """Current filter selections.

    Within one dimension the selected values are OR-ed, across
    dimensions they are AND-ed. An empty list puts no constraint on its
    dimension. ``search`` is applied separately through
    ``search.search_resources``.
    """

    difficulty: List[DifficultyLevel] = Field(default_factory=list)
    price_type: List[PriceType] = Field(default_factory=list)
    platforms: List[Platform] = Field(default_factory=list)
    search: str = ""


class FilterOption(CamelModel):
    value: str
    count: int


class FilterOptions(CamelModel):
    """Every member of each filter enumeration with its resource count."""

    difficulties: List[FilterOption]
    price_types: List[FilterOption]
    platforms: List[FilterOption]


class SearchMatch(CamelModel):
    """Which fields of a resource contain a search query."""

    name: bool = False
    name_ja: bool = False
    description: bool = False
    description_long: bool = False
    tags: List[str] = Field(default_factory=list)


class PaginatedResources(CamelModel):
    """A wrapper for paginated results returned from the listing endpoint."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[Resource]
