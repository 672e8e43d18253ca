"""Serving-size solving for a single food."""

import math
from dataclasses import dataclass

from macro_match.domain.catalog import FoodRecord
from macro_match.domain.matching import MacroKey, calc_kcal

DEFAULT_MIN_GRAMS = 30
DEFAULT_MAX_GRAMS = 600
DEFAULT_STEP = 20
FINE_STEP = 10
FINE_STEP_THRESHOLD = 100
MAX_ITEM_KCAL = 800.0


@dataclass(frozen=True)
class GramBounds:
    """Allowed serving range and rounding step for a food."""

    min: int
    max: int
    step: int

    @property
    def lowest(self) -> int:
        """Smallest step multiple inside the range."""
        return math.ceil(self.min / self.step) * self.step

    @property
    def highest(self) -> int:
        """Largest step multiple inside the range."""
        return math.floor(self.max / self.step) * self.step

    def contains(self, grams: float) -> bool:
        return self.min <= grams <= self.max and grams % self.step == 0


OLIVE_OIL_BOUNDS = GramBounds(min=5, max=20, step=5)
HAMBURGER_BOUNDS = GramBounds(min=100, max=200, step=100)


def default_step(target_value: float) -> int:
    """Use a finer step for large protein targets."""
    return FINE_STEP if target_value >= FINE_STEP_THRESHOLD else DEFAULT_STEP


def serving_bounds(
    food: FoodRecord,
    min_grams: int = DEFAULT_MIN_GRAMS,
    max_grams: int = DEFAULT_MAX_GRAMS,
    step: int = DEFAULT_STEP,
) -> GramBounds:
    """Return class-specific bounds, overriding the defaults for oil and burgers."""
    if food.is_olive_oil:
        return OLIVE_OIL_BOUNDS
    if food.is_hamburger:
        return HAMBURGER_BOUNDS
    return GramBounds(min=min_grams, max=max_grams, step=step)


def round_to_step(value: float, step: int) -> int:
    """Round to the nearest multiple of ``step``, halves rounding up."""
    return math.floor(value / step + 0.5) * step


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def solve_grams(
    food: FoodRecord, target_value: float, macro: MacroKey, bounds: GramBounds
) -> int:
    """Return the stepped, bounded serving that best hits ``target_value``.

    Callers must skip foods with a non-positive density when the target is
    positive. A zero target resolves to the smallest allowed serving.
    """
    density = food.density(macro)
    if target_value <= 0 or density <= 0:
        return bounds.lowest
    raw = (target_value / density) * 100
    return int(clamp(round_to_step(raw, bounds.step), bounds.lowest, bounds.highest))


def item_kcal_for_grams(food: FoodRecord, grams: float) -> float:
    """Estimate the energy of a serving."""
    return calc_kcal(
        food.protein * grams / 100,
        food.fat * grams / 100,
        food.carb * grams / 100,
    )


def is_within_kcal_limit(
    food: FoodRecord, grams: float, limit: float = MAX_ITEM_KCAL
) -> bool:
    return item_kcal_for_grams(food, grams) <= limit
