"""Supabase-backed catalog source."""

from dataclasses import dataclass

from supabase import Client

from macro_match.services.catalog import CatalogLoadError, CatalogSource

_COLUMNS = "id,name_EN,name_IT,name_ES,image,category,protein,fat,carb"


@dataclass
class SupabaseCatalogSource(CatalogSource):
    """Reads the food catalog from a Supabase table in id order."""

    client: Client
    table: str = "foods_catalog"

    async def fetch_foods(self) -> list[dict[str, object]]:
        """Select every catalog row."""
        response = (
            self.client.table(self.table).select(_COLUMNS).order("id").execute()
        )
        if not response.data:
            raise CatalogLoadError(f"Catalog table {self.table} returned no rows")
        return list(response.data)
