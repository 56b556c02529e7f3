"""FastAPI application factory for the artifact showcase."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI

from showcase import __version__
from showcase.api.deps import get_artifact_store, init_artifact_store, reset_artifact_store
from showcase.api.middleware import RequestTimingMiddleware
from showcase.api.routers import artifacts, facets
from showcase.api.schemas import HealthResponse
from showcase.service.artifact_store import ArtifactStore
from showcase.settings import Settings

logger = logging.getLogger("showcase.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Load the artifact snapshot once for the lifetime of the application."""
    settings: Settings = app.state.settings
    store = ArtifactStore.from_settings(settings)
    logger.info("Serving %d artifacts (source=%s)", len(store), settings.source)
    init_artifact_store(store)
    try:
        yield
    finally:
        reset_artifact_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Artifact Showcase",
        description="Browse, search and load indexed AI-generated UI components.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestTimingMiddleware)

    app.include_router(artifacts.router, prefix="/artifacts", tags=["artifacts"])
    app.include_router(facets.router, prefix="/facets", tags=["facets"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health(
        store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
    ) -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, artifacts=len(store))

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "Artifact Showcase API v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "showcase.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
