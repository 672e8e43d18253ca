"""Tests for category filters."""

from macro_match.domain.matching import CategoryFilters
from macro_match.services.filters import apply_category_filters
from tests.conftest import make_food


def _foods():
    return [
        make_food("chicken", protein=23, category="meat"),
        make_food("tuna", protein=25, category="Fish"),
        make_food("pizza", protein=11, category="junk, vegetarian"),
        make_food("lentils", protein=9, category="legumes"),
    ]


def test_no_flags_is_noop() -> None:
    foods = _foods()

    assert apply_category_filters(foods, CategoryFilters()) == foods


def test_each_flag_excludes_its_category() -> None:
    foods = _foods()

    no_meat = apply_category_filters(foods, CategoryFilters(avoid_meat=True))
    no_fish = apply_category_filters(foods, CategoryFilters(avoid_fish=True))
    no_junk = apply_category_filters(foods, CategoryFilters(avoid_junk=True))

    assert [food.id for food in no_meat] == ["tuna", "pizza", "lentils"]
    assert [food.id for food in no_fish] == ["chicken", "pizza", "lentils"]
    assert [food.id for food in no_junk] == ["chicken", "tuna", "lentils"]


def test_flags_combine() -> None:
    filters = CategoryFilters(avoid_meat=True, avoid_fish=True, avoid_junk=True)

    assert [food.id for food in apply_category_filters(_foods(), filters)] == [
        "lentils"
    ]
