"""Entry point for serving the Franchise API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``5000``).  The store location comes from
``DATABASE_URL``.

Usage:
    python -m franchise_api.run
    franchise-api
"""
import asyncio
import logging
from typing import Optional

from uvicorn import Config, Server

from franchise_api.app.core.config import Settings
from franchise_api.app.main import create_app

STARTUP_FAILURE = 3


def build_server(settings: Optional[Settings] = None) -> Server:
    """Build a Uvicorn server for a freshly created application."""
    settings = settings or Settings.from_env()
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        # Handlers come from setup_logging; uvicorn's loggers propagate to them.
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    return Server(config)


async def serve(settings: Optional[Settings] = None) -> None:
    server = build_server(settings)
    logging.getLogger(__name__).info(
        "Server running on port %s", server.config.port
    )
    await server.serve()
    if not server.started:
        # Startup failed, e.g. the store was unreachable with STORE_FAIL_FAST.
        raise SystemExit(STARTUP_FAILURE)


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
