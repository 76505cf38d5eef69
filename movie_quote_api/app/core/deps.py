"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Request

from ..services.quote_service import QuoteService


def get_quote_service(request: Request) -> QuoteService:
    """Return the service instance created by ``create_app``."""
    return request.app.state.quote_service
