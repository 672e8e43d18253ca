"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from macro_match.adapters.http_catalog_client import HttpxCatalogSource
from macro_match.adapters.json_file_catalog import JsonFileCatalogSource
from macro_match.adapters.supabase_catalog_repository import SupabaseCatalogSource
from macro_match.config import Settings
from macro_match.services.cache import InMemoryCache
from macro_match.services.catalog import CatalogSource, CatalogStore
from macro_match.services.combos import CombinationBuilder
from macro_match.services.matching import MatchingService
from macro_match.services.rotation import RotatorRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_store: CatalogStore
    catalog_source: CatalogSource
    matching_service: MatchingService
    rotator_registry: RotatorRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_catalog_source(settings: Settings) -> CatalogSource:
    """Pick the catalog source: Supabase, then URL, then local file."""
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseCatalogSource(client, table=settings.catalog_table)
    if settings.catalog_url:
        return HttpxCatalogSource.create(settings.catalog_url)
    return JsonFileCatalogSource(Path(settings.catalog_path))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog_store = CatalogStore()
    catalog_source = build_catalog_source(resolved_settings)
    matching_service = MatchingService(
        catalog=catalog_store,
        builder=CombinationBuilder(debug=resolved_settings.debug),
        max_visible_results=resolved_settings.max_visible_results,
        strict_single_macro=resolved_settings.strict_single_macro,
        debug=resolved_settings.debug,
    )
    rotator_registry = RotatorRegistry(
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.rotation_ttl_seconds,
    )

    async def close_resources() -> None:
        if isinstance(catalog_source, HttpxCatalogSource):
            await catalog_source.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_store=catalog_store,
        catalog_source=catalog_source,
        matching_service=matching_service,
        rotator_registry=rotator_registry,
        close_resources=close_resources,
    )
