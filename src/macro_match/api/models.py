"""Pydantic models for the matching API."""

from typing import Literal

from pydantic import BaseModel, Field

from macro_match.domain.catalog import FoodRecord, Locale
from macro_match.domain.matching import (
    CategoryFilters,
    Combination,
    CombinationsResult,
    ComboItem,
    EmptyResult,
    FoodMatch,
    MacroTarget,
    MatchResult,
    calc_kcal,
)


class MatchRequest(BaseModel):
    """Macro target form payload."""

    protein: float | str | None = None
    fat: float | str | None = None
    carb: float | str | None = None
    avoid_meat: bool = False
    avoid_fish: bool = False
    avoid_junk: bool = False
    lang: str | None = None

    def to_target(self) -> MacroTarget:
        return MacroTarget.from_inputs(self.protein, self.fat, self.carb)

    def to_filters(self) -> CategoryFilters:
        return CategoryFilters(
            avoid_meat=self.avoid_meat,
            avoid_fish=self.avoid_fish,
            avoid_junk=self.avoid_junk,
        )


class ComboItemOut(BaseModel):
    """Serving of one food inside a combination."""

    food_id: str
    name: str
    image: str
    grams: float
    protein: float
    fat: float
    carb: float
    kcal: float


class CombinationOut(BaseModel):
    """Combination with totals and score."""

    items: list[ComboItemOut]
    total_protein: float
    total_fat: float
    total_carb: float
    total_kcal: float
    score: float


class FoodMatchOut(BaseModel):
    """Single-food match with per-100g macros."""

    food_id: str
    name: str
    image: str
    protein: float
    fat: float
    carb: float
    kcal: float
    score: float


class MatchResponse(BaseModel):
    """Structured match outcome."""

    kind: Literal["combinations", "matches", "empty"]
    reason: str | None = None
    pool_size: int = 0
    combinations: list[CombinationOut] = Field(default_factory=list)
    matches: list[FoodMatchOut] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: MatchResult, locale: Locale) -> "MatchResponse":
        """Convert a domain result, resolving names for ``locale``."""
        if isinstance(result, EmptyResult):
            return cls(kind="empty", reason=result.reason.value)
        if isinstance(result, CombinationsResult):
            return cls(
                kind="combinations",
                pool_size=len(result.pool),
                combinations=[
                    _combination_out(combo, locale) for combo in result.visible
                ],
            )
        return cls(
            kind="matches",
            pool_size=len(result.matches),
            matches=[_match_out(match, locale) for match in result.matches],
        )


def _item_out(item: ComboItem, locale: Locale) -> ComboItemOut:
    return ComboItemOut(
        food_id=item.food_id,
        name=item.food.display_name(locale),
        image=item.food.image,
        grams=item.grams,
        protein=item.protein,
        fat=item.fat,
        carb=item.carb,
        kcal=item.kcal,
    )


def _combination_out(combo: Combination, locale: Locale) -> CombinationOut:
    return CombinationOut(
        items=[_item_out(item, locale) for item in combo.items],
        total_protein=combo.total_protein,
        total_fat=combo.total_fat,
        total_carb=combo.total_carb,
        total_kcal=combo.total_kcal,
        score=combo.score,
    )


def _match_out(match: FoodMatch, locale: Locale) -> FoodMatchOut:
    food: FoodRecord = match.food
    return FoodMatchOut(
        food_id=food.id,
        name=food.display_name(locale),
        image=food.image,
        protein=food.protein,
        fat=food.fat,
        carb=food.carb,
        kcal=calc_kcal(food.protein, food.fat, food.carb),
        score=match.score,
    )
