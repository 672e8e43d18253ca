"""Domain models for macro targets, combinations and match results."""

import math
from dataclasses import dataclass
from enum import StrEnum

from macro_match.domain.catalog import FoodCategory, FoodRecord

TARGET_MIN = 0.0
TARGET_MAX = 100.0


class MacroKey(StrEnum):
    """Macronutrients a target can ask for."""

    PROTEIN = "protein"
    FAT = "fat"
    CARB = "carb"


MACRO_KEYS: tuple[MacroKey, ...] = (MacroKey.PROTEIN, MacroKey.FAT, MacroKey.CARB)


def calc_kcal(protein: float, fat: float, carb: float) -> float:
    """Estimate energy from macro grams (4/9/4 kcal per gram)."""
    return protein * 4 + fat * 9 + carb * 4


@dataclass(frozen=True)
class MacroTarget:
    """Requested grams per macro; ``None`` means no target for that macro.

    Zero is a present value and asks for as little of that macro as possible.
    """

    protein: float | None = None
    fat: float | None = None
    carb: float | None = None

    @classmethod
    def from_inputs(
        cls,
        protein: object = None,
        fat: object = None,
        carb: object = None,
    ) -> "MacroTarget":
        """Build a target from raw form values, clamping into [0, 100]."""
        return cls(
            protein=_parse_macro_input(protein),
            fat=_parse_macro_input(fat),
            carb=_parse_macro_input(carb),
        )

    def get(self, key: MacroKey | str) -> float | None:
        """Return the target for a macro, if any."""
        return getattr(self, str(key))

    def present_keys(self) -> list[MacroKey]:
        """Return targeted macros in protein, fat, carb order."""
        return [key for key in MACRO_KEYS if self.get(key) is not None]

    @property
    def is_protein_only(self) -> bool:
        """True for a positive protein target with no other macro targeted.

        A zero protein target means "avoid protein" and takes the general
        path, where the food's protein density is the distance.
        """
        return (
            self.present_keys() == [MacroKey.PROTEIN]
            and self.protein is not None
            and self.protein > 0
        )

    @property
    def is_single_macro(self) -> bool:
        return len(self.present_keys()) == 1


def _parse_macro_input(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return min(max(number, TARGET_MIN), TARGET_MAX)


@dataclass(frozen=True)
class CategoryFilters:
    """Exclusion flags applied to the catalog before matching."""

    avoid_meat: bool = False
    avoid_fish: bool = False
    avoid_junk: bool = False

    def excluded_categories(self) -> frozenset[FoodCategory]:
        """Return categories that must not appear in results."""
        excluded = set()
        if self.avoid_meat:
            excluded.add(FoodCategory.MEAT)
        if self.avoid_fish:
            excluded.add(FoodCategory.FISH)
        if self.avoid_junk:
            excluded.add(FoodCategory.JUNK)
        return frozenset(excluded)


@dataclass(frozen=True)
class ComboItem:
    """A catalog food with a resolved serving size."""

    food: FoodRecord
    grams: float

    @property
    def food_id(self) -> str:
        return self.food.id

    @property
    def protein(self) -> float:
        return self.food.protein * self.grams / 100

    @property
    def fat(self) -> float:
        return self.food.fat * self.grams / 100

    @property
    def carb(self) -> float:
        return self.food.carb * self.grams / 100

    @property
    def kcal(self) -> float:
        return calc_kcal(self.protein, self.fat, self.carb)


@dataclass(frozen=True)
class Combination:
    """Foods with serving sizes plus their totals and fitness score."""

    items: tuple[ComboItem, ...]
    total_protein: float
    total_fat: float
    total_carb: float
    total_kcal: float
    score: float

    @classmethod
    def from_items(cls, items: tuple[ComboItem, ...], score: float) -> "Combination":
        """Create a combination, summing totals from its items."""
        protein, fat, carb = combination_totals(items)
        return cls(
            items=items,
            total_protein=protein,
            total_fat=fat,
            total_carb=carb,
            total_kcal=calc_kcal(protein, fat, carb),
            score=score,
        )

    @property
    def key(self) -> str:
        """Identity key: sorted food ids, independent of item order."""
        return combination_key(self.items)

    def total(self, key: MacroKey | str) -> float:
        """Return the combination total for a macro."""
        return getattr(self, f"total_{key}")


def combination_totals(items: tuple[ComboItem, ...]) -> tuple[float, float, float]:
    """Sum protein, fat and carb grams over combo items."""
    protein = sum(item.protein for item in items)
    fat = sum(item.fat for item in items)
    carb = sum(item.carb for item in items)
    return protein, fat, carb


def combination_key(items: tuple[ComboItem, ...]) -> str:
    return "|".join(sorted(item.food_id for item in items))


@dataclass(frozen=True)
class FoodMatch:
    """Single-food nearest match with its ranking distance."""

    food: FoodRecord
    score: float


class EmptyReason(StrEnum):
    """Why a query produced nothing to show."""

    NO_CATALOG = "no-catalog-loaded"
    NO_MACRO = "no-macro-specified"
    MULTIPLE_MACROS = "more-than-one-macro-specified"
    NO_COMBINATION = "no-combination-found"


@dataclass(frozen=True)
class CombinationsResult:
    """Ranked combination pool and the window selected for display."""

    pool: list[Combination]
    visible: list[Combination]


@dataclass(frozen=True)
class MatchesResult:
    """Ranked single-food matches used when no combination exists."""

    matches: list[FoodMatch]


@dataclass(frozen=True)
class EmptyResult:
    """No results, with a reason code."""

    reason: EmptyReason


MatchResult = CombinationsResult | MatchesResult | EmptyResult
