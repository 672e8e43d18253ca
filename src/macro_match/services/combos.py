"""Combination building: prefilter, solve servings, accept, dedup and rank."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from macro_match.domain.catalog import FoodRecord
from macro_match.domain.matching import (
    CategoryFilters,
    Combination,
    ComboItem,
    MacroKey,
    MacroTarget,
    combination_totals,
)
from macro_match.services.filters import apply_category_filters
from macro_match.services.grams import (
    DEFAULT_MAX_GRAMS,
    DEFAULT_MIN_GRAMS,
    DEFAULT_STEP,
    MAX_ITEM_KCAL,
    default_step,
    is_within_kcal_limit,
    serving_bounds,
    solve_grams,
)
from macro_match.services.ranking import rank_candidates

_logger = logging.getLogger(__name__)

MAX_POOL = 60
BASE_TOLERANCE = 5.0
MID_TOLERANCE = 15.0
WIDE_TOLERANCE = 25.0
MID_TOLERANCE_THRESHOLD = 100.0
WIDE_TOLERANCE_THRESHOLD = 150.0


@dataclass
class _ComboPool:
    """Combinations keyed by sorted food ids, keeping the best score per key."""

    _combos: dict[str, Combination] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._combos)

    def add_best(self, combo: Combination) -> None:
        existing = self._combos.get(combo.key)
        if existing is None or combo.score < existing.score:
            self._combos[combo.key] = combo

    def ranked(self, limit: int | None = None) -> list[Combination]:
        combos = sorted(self._combos.values(), key=lambda combo: combo.score)
        return combos if limit is None else combos[:limit]

    def prune(self, limit: int) -> None:
        """Keep only the ``limit`` best combinations."""
        if len(self._combos) <= limit:
            return
        self._combos = {combo.key: combo for combo in self.ranked(limit)}


def macro_tolerance(target_value: float) -> float:
    """Absolute tolerance band for the general builder."""
    if target_value >= WIDE_TOLERANCE_THRESHOLD:
        return WIDE_TOLERANCE
    return BASE_TOLERANCE


def protein_tolerance(target_value: float) -> float:
    """Absolute tolerance band for protein-only searches."""
    if target_value >= WIDE_TOLERANCE_THRESHOLD:
        return WIDE_TOLERANCE
    if target_value >= MID_TOLERANCE_THRESHOLD:
        return MID_TOLERANCE
    return BASE_TOLERANCE


def relative_error_score(
    combo_totals: dict[MacroKey, float], target: MacroTarget
) -> float:
    """Sum of relative errors over targeted macros (lower is better)."""
    score = 0.0
    for key in target.present_keys():
        target_value = target.get(key)
        score += abs(combo_totals[key] - target_value) / max(target_value, 1.0)
    return score


def within_tolerance(combo_totals: dict[MacroKey, float], target: MacroTarget) -> bool:
    """Return true when every targeted macro sits inside its tolerance band."""
    return all(
        abs(combo_totals[key] - target.get(key)) <= macro_tolerance(target.get(key))
        for key in target.present_keys()
    )


def _totals_by_key(items: tuple[ComboItem, ...]) -> dict[MacroKey, float]:
    protein, fat, carb = combination_totals(items)
    return {MacroKey.PROTEIN: protein, MacroKey.FAT: fat, MacroKey.CARB: carb}


def _has_any_macro(food: FoodRecord) -> bool:
    return food.protein > 0 or food.fat > 0 or food.carb > 0


@dataclass
class CombinationBuilder:
    """Builds ranked pools of single-food servings that approximate a target."""

    pool_cap: int = MAX_POOL
    candidate_limit: int = 12
    protein_candidate_limit: int = 20
    min_grams: int = DEFAULT_MIN_GRAMS
    max_grams: int = DEFAULT_MAX_GRAMS
    step: int = DEFAULT_STEP
    max_item_kcal: float = MAX_ITEM_KCAL
    debug: bool = False

    def build(
        self,
        foods: Sequence[FoodRecord],
        target: MacroTarget,
        filters: CategoryFilters,
        allow_fallback: bool = True,
    ) -> list[Combination]:
        """Build combinations for any mix of targeted macros.

        Servings outside the tolerance band are kept in a capped fallback
        pool that is returned only when nothing was accepted and the caller
        allows it.
        """
        target_keys = target.present_keys()
        if not target_keys:
            return []

        candidates = rank_candidates(
            apply_category_filters(foods, filters), target, self.candidate_limit
        )
        sources = [food for food in candidates if _has_any_macro(food)]

        accepted = _ComboPool()
        fallback = _ComboPool()
        for food in sources:
            if len(accepted) >= self.pool_cap:
                break
            if food.is_olive_oil:
                continue
            for key in target_keys:
                if len(accepted) >= self.pool_cap:
                    break
                target_value = target.get(key)
                if food.density(key) <= 0 and target_value > 0:
                    continue
                bounds = serving_bounds(
                    food, self.min_grams, self.max_grams, self.step
                )
                grams = solve_grams(food, target_value, key, bounds)
                if not is_within_kcal_limit(food, grams, self.max_item_kcal):
                    continue
                items = (ComboItem(food=food, grams=grams),)
                totals = _totals_by_key(items)
                combo = Combination.from_items(
                    items, score=relative_error_score(totals, target)
                )
                if within_tolerance(totals, target):
                    accepted.add_best(combo)
                else:
                    fallback.add_best(combo)
                    fallback.prune(self.pool_cap)

        if self.debug:
            _logger.info(
                "Combination build: keys=%s candidates=%s accepted=%s fallback=%s",
                [str(key) for key in target_keys],
                len(sources),
                len(accepted),
                len(fallback),
            )
        if len(accepted):
            return accepted.ranked(self.pool_cap)
        if not allow_fallback:
            return []
        return fallback.ranked(self.pool_cap)

    def build_protein(
        self,
        foods: Sequence[FoodRecord],
        target_protein: float,
        filters: CategoryFilters,
    ) -> list[Combination]:
        """Build combinations for a protein-only target.

        Uses a wider prefilter and a finer step for large targets; the score
        is the absolute protein deviation in grams.
        """
        target = MacroTarget(protein=target_protein)
        step = default_step(target_protein)
        tolerance = protein_tolerance(target_protein)
        candidates = rank_candidates(
            apply_category_filters(foods, filters),
            target,
            self.protein_candidate_limit,
        )
        sources = [food for food in candidates if food.protein > 0]

        accepted = _ComboPool()
        for food in sources:
            if len(accepted) >= self.pool_cap:
                break
            if food.is_olive_oil:
                continue
            bounds = serving_bounds(food, self.min_grams, self.max_grams, step)
            grams = solve_grams(food, target_protein, MacroKey.PROTEIN, bounds)
            if not is_within_kcal_limit(food, grams, self.max_item_kcal):
                continue
            item = ComboItem(food=food, grams=grams)
            deviation = abs(item.protein - target_protein)
            if deviation <= tolerance:
                accepted.add_best(Combination.from_items((item,), score=deviation))

        if self.debug:
            _logger.info(
                "Protein build: target=%s step=%s candidates=%s accepted=%s",
                target_protein,
                step,
                len(sources),
                len(accepted),
            )
        return accepted.ranked(self.pool_cap)
