"""Tests for catalog parsing and the catalog store."""

import asyncio

import pytest

from macro_match.domain.catalog import FoodCategory, Locale, resolve_locale
from macro_match.services.catalog import CatalogLoadError, CatalogStore
from tests.conftest import CATALOG_ROWS, FakeCatalogSource, food_row, make_food


def test_parse_food_row_normalizes_tags() -> None:
    food = make_food("burger", protein=20, fat=15, category=" Meat , HAMBURGER,,dairy")

    assert food.categories == frozenset({FoodCategory.MEAT, FoodCategory.HAMBURGER})
    assert food.is_hamburger
    assert not food.is_olive_oil
    assert food.category == " Meat , HAMBURGER,,dairy"


def test_olive_oil_detected_by_italian_name() -> None:
    untagged = make_food("oil", fat=100, name_it="Olio d'oliva extravergine")
    tagged = make_food("oil-2", fat=100, category="olive-oil")

    assert untagged.is_olive_oil
    assert tagged.is_olive_oil


def test_display_name_falls_back_to_english() -> None:
    food = make_food("apple", carb=14)
    blank_it = make_food("pear", carb=15, name_it="")

    assert food.display_name(Locale.IT) == "apple (it)"
    assert food.display_name(Locale.ES) == "apple (es)"
    assert food.display_name("fr") == "apple (en)"
    assert blank_it.display_name(Locale.IT) == "pear (en)"


def test_resolve_locale_from_language_tags() -> None:
    assert resolve_locale("it-IT,it;q=0.9") == Locale.IT
    assert resolve_locale("es") == Locale.ES
    assert resolve_locale("en-US") == Locale.EN
    assert resolve_locale(None) == Locale.EN


def test_store_loads_once_and_keeps_order() -> None:
    store = CatalogStore()
    store.load(list(CATALOG_ROWS))

    assert store.is_loaded
    assert [food.id for food in store.foods][:3] == [
        "chicken-breast",
        "turkey-breast",
        "beef-burger",
    ]
    with pytest.raises(CatalogLoadError):
        store.load(list(CATALOG_ROWS))


def test_store_rejects_invalid_rows() -> None:
    store = CatalogStore()
    bad = food_row("broken", 10, 1, 1)
    bad["protein"] = "lots"

    with pytest.raises(CatalogLoadError):
        store.load([bad])
    with pytest.raises(CatalogLoadError):
        store.load(["not-an-object"])  # type: ignore[list-item]
    assert not store.is_loaded


def test_store_load_from_source() -> None:
    source = FakeCatalogSource()
    store = CatalogStore()

    asyncio.run(store.load_from(source))

    assert source.calls == 1
    assert len(store.foods) == len(CATALOG_ROWS)
