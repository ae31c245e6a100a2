"""Tests for loading and querying the resource store."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from resource_library.catalog.counts import validate_category_counts
from resource_library.catalog.schemas import Category, Resource, Subcategory
from resource_library.catalog.store import CatalogError, ResourceStore
from resource_library.settings import PACKAGE_DATA_DIR

from conftest import ids, make_resource


def _category(category_id, subcategory_ids, order=0):
    return {
        "id": category_id,
        "name": category_id.title(),
        "order": order,
        "subcategories": [
            {"id": sub_id, "name": sub_id.title(), "parentCategory": category_id} for sub_id in subcategory_ids
        ],
    }


def _record(rid, category="apps", subcategory="flashcards", **extra):
    record = {
        "id": rid,
        "name": rid.title(),
        "description": f"{rid} description",
        "category": category,
        "subcategory": subcategory,
        "tags": ["tag"],
        "difficulty": "beginner",
        "priceType": "free",
        "platforms": ["web"],
        "url": f"https://example.com/{rid}",
    }
    record.update(extra)
    return record


def write_data(root, categories, resources_by_category):
    (root / "resources").mkdir(parents=True, exist_ok=True)
    (root / "categories.json").write_text(json.dumps({"categories": categories}), encoding="utf-8")
    for category_id, records in resources_by_category.items():
        (root / "resources" / f"{category_id}.json").write_text(
            json.dumps({"resources": records}), encoding="utf-8"
        )
    return root


@pytest.fixture
def data_dir(tmp_path):
    return write_data(
        tmp_path,
        [_category("kanji", ["reference"], order=2), _category("apps", ["flashcards", "dictionaries"], order=1)],
        {
            "apps": [
                _record("anki", featured=True, tags=["srs", "kanji"]),
                _record("takoboto", subcategory="dictionaries"),
            ],
            "kanji": [_record("kanji-alive", category="kanji", subcategory="reference", tags=["kanji"])],
        },
    )


def test_loads_in_taxonomy_order(data_dir):
    store = ResourceStore(data_dir)
    assert [c.id for c in store.categories()] == ["apps", "kanji"]
    assert ids(store.resources()) == ["anki", "takoboto", "kanji-alive"]
    assert store.data_dir == data_dir


def test_lookups(data_dir):
    store = ResourceStore(data_dir)
    assert store.get_resource("anki").name == "Anki"
    assert store.get_resource("missing") is None
    assert store.get_category("kanji").name == "Kanji"
    assert store.get_category("games") is None
    assert store.get_subcategory("apps", "dictionaries").parent_category == "apps"
    assert store.get_subcategory("apps", "reference") is None
    assert store.get_subcategory("games", "reference") is None
    assert ids(store.resources_by_category("apps")) == ["anki", "takoboto"]
    assert ids(store.resources_by_subcategory("apps", "dictionaries")) == ["takoboto"]
    assert store.resources_by_category("games") == []


def test_featured_and_related(data_dir):
    store = ResourceStore(data_dir)
    assert ids(store.featured_resources()) == ["anki"]
    assert store.featured_resources("kanji") == []
    anki = store.get_resource("anki")
    # same category (takoboto) or shared tag (kanji-alive)
    assert ids(store.related_resources(anki)) == ["takoboto", "kanji-alive"]
    assert ids(store.related_resources(anki, limit=1)) == ["takoboto"]


def test_categories_with_counts(data_dir):
    store = ResourceStore(data_dir)
    enriched = store.categories_with_counts()
    assert [(c.id, c.resource_count) for c in enriched] == [("apps", 2), ("kanji", 1)]
    assert [(s.id, s.resource_count) for s in enriched[0].subcategories_with_count] == [
        ("flashcards", 1),
        ("dictionaries", 1),
    ]
    assert validate_category_counts(enriched, store.resources())


def test_missing_resource_file_is_skipped(tmp_path):
    root = write_data(tmp_path, [_category("apps", ["flashcards"]), _category("kanji", ["reference"])], {})
    store = ResourceStore(root)
    assert store.resources() == ()
    assert len(store.categories()) == 2


def test_missing_taxonomy_raises(tmp_path):
    with pytest.raises(CatalogError, match="Taxonomy not found"):
        ResourceStore(tmp_path)


def test_malformed_json_raises(tmp_path):
    (tmp_path / "categories.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(CatalogError, match="Malformed JSON"):
        ResourceStore(tmp_path)


@pytest.mark.parametrize(
    "records,message",
    [
        ([_record("a"), _record("a")], "duplicate resource id"),
        ([_record("a", category="games")], "unknown category"),
        ([_record("a", subcategory="nope")], "not listed under"),
        ([_record("a", difficulty="expert")], "invalid resource 'a'"),
        ([_record("a", tags=[])], "invalid resource 'a'"),
        ([_record("a", rating=9)], "invalid resource 'a'"),
        ([_record("a", rating="4")], "invalid resource 'a'"),
        ([_record("a", featured="yes")], "invalid resource 'a'"),
        ([_record("a", rating=None)], "invalid resource 'a'"),
    ],
)
def test_inconsistent_records_raise(tmp_path, records, message):
    root = write_data(tmp_path, [_category("apps", ["flashcards"]), _category("games", ["general"])], {})
    (root / "resources" / "apps.json").write_text(json.dumps({"resources": records}), encoding="utf-8")
    if message == "unknown category":
        # taxonomy without 'games', resource file still under apps
        (root / "categories.json").write_text(
            json.dumps({"categories": [_category("apps", ["flashcards"])]}), encoding="utf-8"
        )
    with pytest.raises(CatalogError, match=message):
        ResourceStore(root)


def test_records_are_immutable(data_dir):
    store = ResourceStore(data_dir)
    with pytest.raises(ValidationError):
        store.get_resource("anki").name = "changed"
    assert store.get_resource("anki").name == "Anki"


def test_from_records():
    category = Category(
        id="apps", name="Apps", subcategories=[Subcategory(id="flashcards", name="F", parent_category="apps")]
    )
    store = ResourceStore.from_records([category], [make_resource(id="a"), make_resource(id="b")])
    assert ids(store.resources()) == ["a", "b"]
    assert store.categories_with_counts()[0].resource_count == 2
    assert store.data_dir == Path(".")


def test_from_records_checks_consistency():
    category = Category(id="apps", name="Apps", subcategories=[])
    with pytest.raises(CatalogError, match="not listed under"):
        ResourceStore.from_records([category], [make_resource(id="a")])


@pytest.mark.parametrize("field,value", [("rating", "4"), ("featured", "yes"), ("featured", 1)])
def test_resource_model_does_not_coerce(field, value):
    with pytest.raises(ValidationError):
        Resource.model_validate(_record("a", **{field: value}))


def test_packaged_data_loads_consistently():
    store = ResourceStore(PACKAGE_DATA_DIR)
    assert len(store.resources()) > 0
    assert validate_category_counts(store.categories_with_counts(), store.resources())
    orders = [c.order for c in store.categories()]
    assert orders == sorted(orders)
