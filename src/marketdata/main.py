"""Entry point for the market-data pipeline API server.

Loads settings, configures logging and serves the FastAPI app with uvicorn.
"""

import asyncio

import uvicorn

from marketdata.api.app import create_app
from marketdata.config import AppSettings
from marketdata.logging import get_logger, setup_logging


async def run() -> None:
    """Run the API server until interrupted."""
    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("marketdata.main")

    app = create_app(settings)

    logger.info(
        "starting_api",
        host=settings.api.host,
        port=settings.api.port,
    )

    config = uvicorn.Config(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level="warning",  # request logging comes from the route handlers
    )
    server = uvicorn.Server(config)
    await server.serve()

    logger.info("api_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
