"""Entry point that turns a macro target into displayable results."""

import logging
from dataclasses import dataclass, field

from macro_match.domain.matching import (
    CategoryFilters,
    CombinationsResult,
    EmptyReason,
    EmptyResult,
    FoodMatch,
    MacroTarget,
    MatchesResult,
    MatchResult,
)
from macro_match.services.catalog import CatalogStore
from macro_match.services.combos import CombinationBuilder
from macro_match.services.filters import apply_category_filters
from macro_match.services.ranking import (
    first_target_key,
    item_distance,
    rank_candidates,
)
from macro_match.services.rotation import SelectionRotator

_logger = logging.getLogger(__name__)


@dataclass
class MatchingService:
    """Application service for macro matching queries."""

    catalog: CatalogStore
    builder: CombinationBuilder = field(default_factory=CombinationBuilder)
    max_visible_results: int = 3
    strict_single_macro: bool = False
    match_candidate_limit: int = 10
    max_matches: int = 6
    debug: bool = False

    def compute_results(
        self,
        target: MacroTarget,
        filters: CategoryFilters,
        rotator: SelectionRotator | None = None,
    ) -> MatchResult:
        """Compute combinations, falling back to nearest single foods."""
        foods = self.catalog.foods
        if not foods:
            return EmptyResult(EmptyReason.NO_CATALOG)
        target_keys = target.present_keys()
        if not target_keys:
            return EmptyResult(EmptyReason.NO_MACRO)
        if self.strict_single_macro and len(target_keys) > 1:
            return EmptyResult(EmptyReason.MULTIPLE_MACROS)

        if target.is_protein_only:
            pool = self.builder.build_protein(foods, target.protein, filters)
        else:
            pool = self.builder.build(
                foods, target, filters, allow_fallback=len(target_keys) <= 1
            )

        if self.debug:
            _logger.info(
                "Match query: target=%s filters=%s pool=%s", target, filters, len(pool)
            )
        if pool:
            visible = (
                rotator.select(pool, self.max_visible_results)
                if rotator is not None
                else pool[: self.max_visible_results]
            )
            return CombinationsResult(pool=pool, visible=visible)

        matches = self.match_foods(target, filters)
        if not matches:
            return EmptyResult(EmptyReason.NO_COMBINATION)
        return MatchesResult(matches=matches)

    def match_foods(
        self, target: MacroTarget, filters: CategoryFilters
    ) -> list[FoodMatch]:
        """Return the closest single foods to the target."""
        key = first_target_key(target)
        candidates = rank_candidates(
            apply_category_filters(self.catalog.foods, filters),
            target,
            self.match_candidate_limit,
        )
        matches = [
            FoodMatch(food=food, score=item_distance(food, target))
            for food in candidates
            if not food.is_olive_oil
            and (key is None or target.get(key) <= 0 or food.density(key) > 0)
        ]
        matches.sort(key=lambda match: match.score)
        return matches[: self.max_matches]
