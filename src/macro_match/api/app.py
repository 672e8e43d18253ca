"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, Request

from macro_match.api.models import MatchRequest, MatchResponse
from macro_match.app_logging import configure_logging
from macro_match.containers import AppContainer
from macro_match.domain.catalog import resolve_locale


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if not state_container.catalog_store.is_loaded:
            try:
                await state_container.catalog_store.load_from(
                    state_container.catalog_source
                )
            except Exception:
                logger.exception("Failed to load food catalog")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/catalog")
    async def catalog_status(request: Request) -> dict[str, object]:
        """Report whether the catalog is loaded and how many foods it has."""
        state_container: AppContainer = request.app.state.container
        store = state_container.catalog_store
        return {"loaded": store.is_loaded, "count": len(store.foods)}

    @app.post("/match")
    async def match(
        payload: MatchRequest,
        request: Request,
        x_session_id: str | None = Header(default=None),
        accept_language: str | None = Header(default=None),
    ) -> MatchResponse:
        """Match a macro target against the catalog."""
        state_container: AppContainer = request.app.state.container
        rotator = state_container.rotator_registry.for_session(x_session_id)
        result = state_container.matching_service.compute_results(
            payload.to_target(), payload.to_filters(), rotator=rotator
        )
        locale = resolve_locale(payload.lang or accept_language)
        return MatchResponse.from_result(result, locale)

    return app
