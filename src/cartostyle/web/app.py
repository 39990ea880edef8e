"""FastAPI application exposing the styling engine to the map client."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cartostyle import __version__
from cartostyle.core.config import Settings
from cartostyle.core.types import HealthStatus
from cartostyle.styling.engine import StylingEngine
from cartostyle.web.styling_router import router as styling_router


def create_app(
    settings: Settings | None = None,
    styling_engine: StylingEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own engine.

    Args:
        settings: Application settings. Defaults to Settings().
        styling_engine: Optional pre-built StylingEngine.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("cartostyle").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Cartostyle",
        description="Thematic classification for choropleth and graduated-symbol styling",
        version=__version__,
        debug=settings.debug,
    )

    # CORS for the browser map client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if styling_engine is None:
        styling_engine = StylingEngine(config=settings.styling)

    app.state.settings = settings
    app.state.styling_engine = styling_engine

    app.include_router(styling_router)

    @app.get("/api/health", response_model=HealthStatus)
    async def health() -> HealthStatus:
        """Health check endpoint."""
        return HealthStatus(
            service="cartostyle",
            healthy=True,
            details={
                "version": __version__,
                "environment": settings.environment,
                "ramps": len(styling_engine.list_ramps()),
            },
        )

    return app
