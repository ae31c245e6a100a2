"""
Data store for the resource catalogue.

``ResourceStore`` loads the taxonomy (``categories.json``) and one
resource file per category (``resources/<category>.json``) from a data
directory. The application creates one store at startup and keeps it on
``app.state``; there is no module-level collection. Once loaded the
records are held in a tuple and never change, so concurrent requests
can read the store without coordination.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from .counts import enrich_categories_with_counts
from .filters import filter_by_category, filter_by_category_and_subcategory
from .schemas import Category, CategoryWithCount, Resource, Subcategory
from .validation import validate_resource


logger = logging.getLogger(__name__)

CATEGORIES_FILE = "categories.json"
RESOURCES_DIR = "resources"


class CatalogError(RuntimeError):
    pass


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise CatalogError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Malformed JSON in {path}: {exc}") from exc


def _load_categories(path: Path) -> List[Category]:
    raw = _read_json(path)
    entries = raw.get("categories") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise CatalogError(f"{path}: expected an object with a 'categories' list")
    categories: List[Category] = []
    for position, entry in enumerate(entries):
        try:
            categories.append(Category.model_validate(entry))
        except ValidationError as exc:
            raise CatalogError(f"{path}: invalid category at index {position}: {exc}") from exc
    # Python's sort is stable, so ties keep file order.
    categories.sort(key=lambda c: c.order)
    return categories


def _load_resource_file(path: Path) -> List[Resource]:
    raw = _read_json(path)
    entries = raw.get("resources") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise CatalogError(f"{path}: expected an object with a 'resources' list")
    resources: List[Resource] = []
    for position, entry in enumerate(entries):
        rid = entry.get("id") if isinstance(entry, dict) else None
        checked = validate_resource(entry)
        if not checked.success:
            problems = checked.missing_fields + [e.field for e in checked.invalid_fields]
            raise CatalogError(
                f"{path}: invalid resource {rid!r} at index {position}: bad fields {', '.join(problems)}"
            )
        try:
            resources.append(Resource.model_validate(entry))
        except ValidationError as exc:
            raise CatalogError(f"{path}: invalid resource {rid!r} at index {position}: {exc}") from exc
    return resources


class ResourceStore:
    """Load + index the resource catalogue for read-only queries.

    Parameters
    ----------
    data_dir : Path
        Directory holding ``categories.json`` and ``resources/``.
    records : (categories, resources), optional
        Already-parsed records; when given, nothing is read from disk.

    Raises
    ------
    CatalogError
        When the taxonomy is missing or a record is malformed, has a
        duplicate id, or does not fit the taxonomy.
    """

    def __init__(
        self,
        data_dir: Path = Path("."),
        records: Optional[Tuple[Sequence[Category], Sequence[Resource]]] = None,
    ):
        self._data_dir = Path(data_dir)
        self._categories: Tuple[Category, ...] = ()
        self._category_by_id: Dict[str, Category] = {}
        self._resources: Tuple[Resource, ...] = ()
        self._resource_by_id: Dict[str, Resource] = {}
        if records is None:
            self._load()
        else:
            categories, resources = records
            self._index(list(categories), list(resources), source="<memory>")

    @classmethod
    def from_records(cls, categories: Sequence[Category], resources: Sequence[Resource]) -> "ResourceStore":
        """Build a store from in-memory records (no files involved)."""
        return cls(records=(categories, resources))

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _load(self) -> None:
        categories_path = self._data_dir / CATEGORIES_FILE
        if not categories_path.exists():
            raise CatalogError(f"Taxonomy not found: {categories_path}")
        categories = _load_categories(categories_path)

        resources: List[Resource] = []
        for category in categories:
            path = self._data_dir / RESOURCES_DIR / f"{category.id}.json"
            if not path.exists():
                logger.warning("No resource file for category %s (%s)", category.id, path)
                continue
            loaded = _load_resource_file(path)
            logger.debug("Loaded %d resources from %s", len(loaded), path)
            resources.extend(loaded)

        self._index(categories, resources, source=str(self._data_dir))
        logger.info(
            "Loaded %d resources across %d categories from %s",
            len(self._resources),
            len(self._categories),
            self._data_dir,
        )

    def _index(self, categories: List[Category], resources: List[Resource], *, source: str) -> None:
        category_by_id = {c.id: c for c in categories}
        by_id: Dict[str, Resource] = {}
        for resource in resources:
            if resource.id in by_id:
                raise CatalogError(f"{source}: duplicate resource id {resource.id!r}")
            category = category_by_id.get(resource.category)
            if category is None:
                raise CatalogError(
                    f"{source}: resource {resource.id!r} uses unknown category {resource.category!r}"
                )
            if not any(sub.id == resource.subcategory for sub in category.subcategories):
                raise CatalogError(
                    f"{source}: resource {resource.id!r} uses subcategory {resource.subcategory!r} "
                    f"which is not listed under {category.id!r}"
                )
            by_id[resource.id] = resource
        self._categories = tuple(categories)
        self._category_by_id = category_by_id
        self._resources = tuple(resources)
        self._resource_by_id = by_id

    # ----------------- taxonomy -----------------

    def categories(self) -> List[Category]:
        return list(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._category_by_id.get(category_id)

    def get_subcategory(self, category_id: str, subcategory_id: str) -> Optional[Subcategory]:
        category = self.get_category(category_id)
        if category is None:
            return None
        return next((s for s in category.subcategories if s.id == subcategory_id), None)

    def categories_with_counts(self) -> List[CategoryWithCount]:
        return enrich_categories_with_counts(self._categories, self._resources)

    # ----------------- resources -----------------

    def resources(self) -> Tuple[Resource, ...]:
        return self._resources

    def resources_by_category(self, category_id: str) -> List[Resource]:
        return filter_by_category(self._resources, category_id)

    def resources_by_subcategory(self, category_id: str, subcategory_id: str) -> List[Resource]:
        return filter_by_category_and_subcategory(self._resources, category_id, subcategory_id)

    def get_resource(self, resource_id: str) -> Optional[Resource]:
        return self._resource_by_id.get(resource_id)

    def featured_resources(self, category_id: Optional[str] = None) -> List[Resource]:
        pool = self._resources if category_id is None else self.resources_by_category(category_id)
        return [r for r in pool if r.featured is True]

    def related_resources(self, resource: Resource, limit: int = 4) -> List[Resource]:
        """Other resources in the same category or sharing at least one tag.

        Source order is kept and the result is capped at ``limit``.
        """
        tags = set(resource.tags)
        related = [
            r
            for r in self._resources
            if r.id != resource.id and (r.category == resource.category or tags.intersection(r.tags))
        ]
        return related[: max(0, limit)]
