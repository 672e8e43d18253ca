"""Candidate ranking by per-food distance to a macro target."""

import math
from collections.abc import Sequence

from macro_match.domain.catalog import FoodRecord
from macro_match.domain.matching import MacroKey, MacroTarget

UNREACHABLE = math.inf


def item_distance(food: FoodRecord, target: MacroTarget) -> float:
    """Return how far a food's densities are from the target.

    For a protein-only target the distance is the grams of food needed to
    reach it, so foods that get there with a sensible serving rank first.
    Otherwise it is the summed absolute difference over targeted macros; a
    zero target therefore contributes the food's raw density for that macro.
    """
    if target.is_protein_only:
        if food.protein <= 0:
            return UNREACHABLE
        return (target.protein / food.protein) * 100
    distance = 0.0
    for key in target.present_keys():
        distance += abs(food.density(key) - target.get(key))
    return distance


def rank_candidates(
    foods: Sequence[FoodRecord], target: MacroTarget, limit: int
) -> list[FoodRecord]:
    """Return the ``limit`` foods closest to the target, stable on ties."""
    scored = [(item_distance(food, target), index) for index, food in enumerate(foods)]
    scored.sort()
    return [foods[index] for _, index in scored[:limit]]


def first_target_key(target: MacroTarget) -> MacroKey | None:
    """Return the first targeted macro in protein, fat, carb order."""
    keys = target.present_keys()
    return keys[0] if keys else None
