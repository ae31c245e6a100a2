"""Shared fixtures: resource factories and seeded random collections."""

import random
import string

import pytest

from resource_library.catalog.schemas import (
    CATEGORY_IDS,
    DIFFICULTY_LEVELS,
    PLATFORMS,
    PRICE_TYPES,
    Category,
    Resource,
    Subcategory,
)

SUBCATEGORY_IDS = (
    "flashcards",
    "dictionaries",
    "comprehensive",
    "beginner",
    "intermediate",
    "grammar",
    "general",
)

SEEDS = range(25)


def make_resource(**overrides):
    fields = dict(
        id="r1",
        name="Sample",
        description="A sample resource",
        category="apps",
        subcategory="flashcards",
        tags=["sample"],
        difficulty="beginner",
        price_type="free",
        platforms=["web"],
        url="https://example.com/",
    )
    fields.update(overrides)
    return Resource(**fields)


def _word(rng, low=3, high=10):
    return "".join(rng.choice(string.ascii_letters + " ") for _ in range(rng.randint(low, high))).strip() or "x"


def random_resources(rng, max_size=40):
    resources = []
    for i in range(rng.randint(0, max_size)):
        resources.append(
            Resource(
                id=f"res-{i}",
                name=_word(rng),
                name_ja=rng.choice([None, "日本語" + _word(rng, 1, 4)]),
                description=_word(rng, 5, 30),
                description_long=rng.choice([None, _word(rng, 10, 40)]),
                category=rng.choice(CATEGORY_IDS),
                subcategory=rng.choice(SUBCATEGORY_IDS),
                tags=[_word(rng, 2, 8) for _ in range(rng.randint(1, 4))],
                difficulty=rng.choice(DIFFICULTY_LEVELS),
                price_type=rng.choice(PRICE_TYPES),
                platforms=rng.sample(PLATFORMS, rng.randint(1, 4)),
                url=f"https://example.com/{i}",
                rating=rng.choice([None, round(rng.uniform(1, 5), 1)]),
                featured=rng.choice([None, True, False]),
            )
        )
    return resources


def random_categories(rng):
    categories = []
    for order, category_id in enumerate(rng.sample(CATEGORY_IDS, rng.randint(1, 5))):
        subs = [
            Subcategory(id=sub_id, name=sub_id.title(), parent_category=category_id)
            for sub_id in rng.sample(SUBCATEGORY_IDS, rng.randint(1, 4))
        ]
        categories.append(Category(id=category_id, name=category_id.title(), subcategories=subs, order=order))
    return categories


def ids(resources):
    return [r.id for r in resources]


@pytest.fixture
def two_resources():
    return [
        make_resource(id="a", category="apps", difficulty="beginner", price_type="free", platforms=["web"]),
        make_resource(id="b", category="apps", difficulty="advanced", price_type="paid", platforms=["ios"]),
    ]
