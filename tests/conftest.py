"""Shared test fixtures."""

import random
from dataclasses import dataclass, field

import pytest

from macro_match.config import Settings
from macro_match.containers import AppContainer
from macro_match.domain.catalog import FoodRecord
from macro_match.domain.matching import Combination, ComboItem
from macro_match.services.cache import InMemoryCache
from macro_match.services.catalog import (
    CatalogLoadError,
    CatalogSource,
    CatalogStore,
    parse_food_row,
)
from macro_match.services.combos import CombinationBuilder
from macro_match.services.matching import MatchingService
from macro_match.services.rotation import RotatorRegistry


def food_row(  # noqa: PLR0913
    food_id: str,
    protein: float,
    fat: float,
    carb: float,
    category: str = "",
    name_it: str | None = None,
) -> dict[str, object]:
    """Raw catalog row in the shape of ``data.json``."""
    return {
        "id": food_id,
        "name_EN": f"{food_id} (en)",
        "name_IT": name_it if name_it is not None else f"{food_id} (it)",
        "name_ES": f"{food_id} (es)",
        "image": f"img/{food_id}.jpg",
        "category": category,
        "protein": protein,
        "fat": fat,
        "carb": carb,
    }


def make_food(  # noqa: PLR0913
    food_id: str,
    protein: float = 0.0,
    fat: float = 0.0,
    carb: float = 0.0,
    category: str = "",
    name_it: str | None = None,
) -> FoodRecord:
    return parse_food_row(food_row(food_id, protein, fat, carb, category, name_it))


def make_combo(food_id: str, score: float = 0.0, grams: float = 100) -> Combination:
    food = make_food(food_id, protein=20, fat=5, carb=10)
    return Combination.from_items((ComboItem(food=food, grams=grams),), score=score)


CATALOG_ROWS = [
    food_row("chicken-breast", 23.3, 1.2, 0, "meat"),
    food_row("turkey-breast", 24, 1.2, 0, "Meat"),
    food_row("beef-burger", 20, 15, 0, "meat, hamburger"),
    food_row("tuna", 25.5, 1, 0, "fish"),
    food_row("salmon", 20, 13, 0, "fish"),
    food_row("greek-yogurt", 10, 0, 4, "dairy"),
    food_row("cottage-cheese", 12, 4.3, 3.4, "dairy"),
    food_row("lentils", 9, 0.4, 20, "legumes"),
    food_row("tofu", 12, 7, 2, "vegan"),
    food_row("rice", 7, 0.6, 80, "grains"),
    food_row("banana", 1.1, 0.3, 23, "fruit"),
    food_row("almonds", 21, 50, 22, "nuts"),
    food_row("olive-oil", 0, 100, 0, "condiment", name_it="Olio di oliva"),
    food_row("pizza", 11, 10, 33, "junk"),
    food_row("fries", 3.4, 15, 41, "junk"),
]


@dataclass
class FakeCatalogSource(CatalogSource):
    """Catalog source returning fixed rows."""

    rows: list[dict[str, object]] = field(default_factory=lambda: list(CATALOG_ROWS))
    calls: int = 0

    async def fetch_foods(self) -> list[dict[str, object]]:
        self.calls += 1
        return self.rows


@dataclass
class FailingCatalogSource(CatalogSource):
    """Catalog source that always fails."""

    async def fetch_foods(self) -> list[dict[str, object]]:
        raise CatalogLoadError("catalog unavailable")


def loaded_store(rows: list[dict[str, object]] | None = None) -> CatalogStore:
    store = CatalogStore()
    store.load(list(CATALOG_ROWS) if rows is None else rows)
    return store


@pytest.fixture
def settings() -> Settings:
    return Settings(catalog_path="data/foods.json")


@pytest.fixture
def catalog_store() -> CatalogStore:
    return loaded_store()


@pytest.fixture
def matching_service(catalog_store: CatalogStore) -> MatchingService:
    return MatchingService(catalog=catalog_store, builder=CombinationBuilder())


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


def make_container(
    settings: Settings,
    catalog_store: CatalogStore,
    catalog_source: CatalogSource | None = None,
) -> AppContainer:
    matching_service = MatchingService(
        catalog=catalog_store,
        builder=CombinationBuilder(),
        max_visible_results=settings.max_visible_results,
        strict_single_macro=settings.strict_single_macro,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog_store=catalog_store,
        catalog_source=catalog_source or FakeCatalogSource(),
        matching_service=matching_service,
        rotator_registry=RotatorRegistry(cache=InMemoryCache()),
        close_resources=close_resources,
    )


@pytest.fixture
def container(settings: Settings, catalog_store: CatalogStore) -> AppContainer:
    return make_container(settings, catalog_store)
