"""Entry point for serving the Movie Quote API.

This script starts the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Host, port and log level are taken from the ``API_HOST``, ``API_PORT``
and ``LOG_LEVEL`` environment variables (see
``movie_quote_api/app/core/config.py``).  Quotes are kept in memory
and are lost when the process stops.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from movie_quote_api.app.core.config import settings
from movie_quote_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Serving on %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
