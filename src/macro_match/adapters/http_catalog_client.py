"""Catalog source fetching the static food list over HTTP."""

from dataclasses import dataclass

import httpx

from macro_match.services.catalog import CatalogLoadError, CatalogSource


@dataclass
class HttpxCatalogSource(CatalogSource):
    """HTTPX-backed catalog source."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxCatalogSource":
        """Create a catalog source with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def fetch_foods(self) -> list[dict[str, object]]:
        """Download the catalog JSON array."""
        response = await self.http_client.get(self.url, timeout=15)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise CatalogLoadError("Catalog response must be a JSON array")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
