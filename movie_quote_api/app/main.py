"""
Main entrypoint for the Movie Quote API.

This module assembles the FastAPI application, sets up logging,
creates the quote store and service, registers the exception
handlers and includes the API router.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn movie_quote_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI, Request

from .api.errors import register_exception_handlers
from .api.router import router as api_router
from .core.config import settings
from .core.logging_config import setup_logging
from .core.store import QuoteStore
from .services.quote_service import QuoteService

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[QuoteStore] = None,
    today: Optional[Callable[[], date]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[QuoteStore]
        Store to serve.  A fresh, empty store is created when omitted.
    today : Optional[Callable[[], date]]
        Date provider for the quote of the day.  Defaults to
        ``date.today``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The service is
        available as ``app.state.quote_service``.
    """
    # Initialise logging before anything else so that the setup below
    # is logged with the configured format and level.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    quote_store = store if store is not None else QuoteStore()
    app.state.quote_service = QuoteService(quote_store, today=today or date.today)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    async def health(request: Request) -> dict:
        service: QuoteService = request.app.state.quote_service
        return {"status": "ok", "quotes": service.store.count()}

    logger.info("%s %s initialised", settings.project_name, settings.api_version)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
