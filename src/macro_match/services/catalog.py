"""Catalog loading and read-only storage."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from macro_match.domain.catalog import FoodRecord, resolve_categories

_logger = logging.getLogger(__name__)


class CatalogLoadError(RuntimeError):
    """Raised when a catalog payload cannot be loaded or parsed."""


class CatalogSource(Protocol):
    """Interface for fetching raw catalog rows."""

    async def fetch_foods(self) -> list[dict[str, object]]:
        """Return raw food rows in catalog order."""


@dataclass
class CatalogStore:
    """Holds the loaded food catalog; read-only once loaded."""

    _foods: tuple[FoodRecord, ...] = field(default=())
    _loaded: bool = False

    @property
    def foods(self) -> tuple[FoodRecord, ...]:
        return self._foods

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, rows: list[dict[str, object]]) -> None:
        """Parse raw rows and freeze them as the catalog."""
        if self._loaded:
            raise CatalogLoadError("Catalog already loaded")
        if not isinstance(rows, list):
            raise CatalogLoadError("Catalog payload must be a list of foods")
        self._foods = tuple(
            parse_food_row(row, index) for index, row in enumerate(rows)
        )
        self._loaded = True
        _logger.info("Catalog loaded: foods=%s", len(self._foods))

    async def load_from(self, source: CatalogSource) -> None:
        """Fetch rows from a source and load them."""
        self.load(await source.fetch_foods())


def parse_food_row(row: object, index: int = 0) -> FoodRecord:
    """Convert a raw catalog row into a ``FoodRecord``."""
    if not isinstance(row, dict):
        raise CatalogLoadError(f"Catalog row {index} is not an object")
    try:
        name_it = str(row.get("name_IT") or "")
        category = str(row.get("category") or "")
        return FoodRecord(
            id=str(row.get("id") or row.get("name_IT") or index),
            name_en=str(row.get("name_EN") or ""),
            name_it=name_it,
            name_es=str(row.get("name_ES") or ""),
            image=str(row.get("image") or ""),
            category=category,
            protein=float(row.get("protein") or 0.0),
            fat=float(row.get("fat") or 0.0),
            carb=float(row.get("carb") or 0.0),
            categories=resolve_categories(category, name_it),
        )
    except (TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Catalog row {index} has invalid macros") from exc
