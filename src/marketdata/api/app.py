"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketdata.api import routes
from marketdata.config import AppSettings


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the market-data API application.

    Args:
        settings: Application settings; loaded from the environment when None.

    Returns:
        FastAPI app with CORS configured and the pipeline routes under /api.
    """
    settings = settings or AppSettings()

    app = FastAPI(title="Market Data Pipeline")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(routes.router, prefix="/api")

    return app
