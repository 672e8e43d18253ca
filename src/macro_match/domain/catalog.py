"""Domain models for the static food catalog."""

from dataclasses import dataclass, field
from enum import StrEnum

_OLIVE_OIL_NAME_MARKERS = ("olio di oliva", "olio d'oliva")


class FoodCategory(StrEnum):
    """Category tags the matching engine reacts to."""

    MEAT = "meat"
    FISH = "fish"
    JUNK = "junk"
    OLIVE_OIL = "olive-oil"
    HAMBURGER = "hamburger"


class Locale(StrEnum):
    """Locales with a name column in the catalog."""

    EN = "en"
    IT = "it"
    ES = "es"


@dataclass(frozen=True)
class FoodRecord:
    """Catalog entry with macro densities per 100g."""

    id: str
    name_en: str
    name_it: str
    name_es: str
    image: str
    category: str
    protein: float
    fat: float
    carb: float
    categories: frozenset[FoodCategory] = field(default_factory=frozenset)

    def density(self, macro: str) -> float:
        """Return grams of a macro per 100g of this food."""
        return float(getattr(self, macro))

    def has_category(self, category: FoodCategory) -> bool:
        """Return true when the food carries the category tag."""
        return category in self.categories

    @property
    def is_olive_oil(self) -> bool:
        return FoodCategory.OLIVE_OIL in self.categories

    @property
    def is_hamburger(self) -> bool:
        return FoodCategory.HAMBURGER in self.categories

    def display_name(self, locale: Locale | str = Locale.EN) -> str:
        """Resolve the localized name, falling back to English."""
        if locale == Locale.IT:
            return self.name_it or self.name_en
        if locale == Locale.ES:
            return self.name_es or self.name_en
        return self.name_en


def parse_category_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag string into trimmed lowercase tags."""
    return [tag.strip().lower() for tag in (raw or "").split(",") if tag.strip()]


def resolve_categories(raw: str | None, name_it: str = "") -> frozenset[FoodCategory]:
    """Map free-text tags to known categories.

    Unknown tags are ignored. Olive oil is also recognised by its Italian
    name, since older catalog rows were never tagged.
    """
    known = {category.value: category for category in FoodCategory}
    categories = {known[tag] for tag in parse_category_tags(raw) if tag in known}
    lowered = name_it.lower()
    if any(marker in lowered for marker in _OLIVE_OIL_NAME_MARKERS):
        categories.add(FoodCategory.OLIVE_OIL)
    return frozenset(categories)


def resolve_locale(value: str | None) -> Locale:
    """Pick a supported locale from a language tag such as ``it-IT``."""
    lowered = (value or "").strip().lower()
    if lowered.startswith(Locale.IT.value):
        return Locale.IT
    if lowered.startswith(Locale.ES.value):
        return Locale.ES
    return Locale.EN
