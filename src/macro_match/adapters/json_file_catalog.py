"""Catalog source reading a bundled JSON file."""

import json
from dataclasses import dataclass
from pathlib import Path

from macro_match.services.catalog import CatalogLoadError, CatalogSource


@dataclass
class JsonFileCatalogSource(CatalogSource):
    """Reads food rows from a local ``data.json``-style file."""

    path: Path

    async def fetch_foods(self) -> list[dict[str, object]]:
        """Read and decode the catalog file."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(f"Failed to read catalog {self.path}") from exc
        if not isinstance(payload, list):
            raise CatalogLoadError("Catalog file must contain a JSON array")
        return payload
