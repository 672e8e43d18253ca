"""Category exclusion filter."""

from collections.abc import Sequence

from macro_match.domain.catalog import FoodRecord
from macro_match.domain.matching import CategoryFilters


def apply_category_filters(
    foods: Sequence[FoodRecord], filters: CategoryFilters
) -> list[FoodRecord]:
    """Drop foods tagged with any actively excluded category."""
    excluded = filters.excluded_categories()
    if not excluded:
        return list(foods)
    return [food for food in foods if not (food.categories & excluded)]
