"""Pytest configuration and shared fixtures.

Provides a fresh store, a service pinned to a fixed date, a FastAPI
test client wired to both, and helpers for building quotes with
explicit creation times.
"""

from datetime import date, datetime, timedelta
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from movie_quote_api.app.core.store import QuoteStore
from movie_quote_api.app.main import create_app
from movie_quote_api.app.models.quote import Quote
from movie_quote_api.app.services.quote_service import QuoteService


FIXED_DAY = date(2024, 1, 15)
BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def store() -> QuoteStore:
    """Create an empty store."""
    return QuoteStore()


@pytest.fixture
def service(store: QuoteStore) -> QuoteService:
    """Create a service whose quote of the day is computed for FIXED_DAY."""
    return QuoteService(store, today=lambda: FIXED_DAY)


@pytest.fixture
def client(store: QuoteStore) -> TestClient:
    """Create a test client for an app serving ``store``."""
    app = create_app(store=store, today=lambda: FIXED_DAY)
    return TestClient(app)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_quote() -> Callable[..., Quote]:
    """Factory for unsaved quotes.

    ``minutes`` offsets ``created_at`` from BASE_TIME so tests control
    the listing order.
    """

    def _make(
        text: str = "Why so serious?",
        character: str = "Joker",
        movie_title: str = "The Dark Knight",
        release_year: int = 2008,
        minutes: int = 0,
    ) -> Quote:
        return Quote(
            text=text,
            character=character,
            movie_title=movie_title,
            release_year=release_year,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def sample_quotes(make_quote) -> list[Quote]:
    """Five quotes from four movies, created one minute apart."""
    return [
        make_quote("Why so serious?", "Joker", "The Dark Knight", 2008, minutes=0),
        make_quote("I'll be back.", "Terminator", "The Terminator", 1984, minutes=1),
        make_quote("Here's looking at you, kid.", "Rick Blaine", "Casablanca", 1942, minutes=2),
        make_quote("May the Force be with you.", "Han Solo", "Star Wars", 1977, minutes=3),
        make_quote("I'm the Batman.", "Batman", "The Dark Knight", 2008, minutes=4),
    ]


@pytest.fixture
def populated_service(service: QuoteService, sample_quotes) -> QuoteService:
    """Service with ``sample_quotes`` added in order (ids "1" to "5")."""
    for quote in sample_quotes:
        service.add_quote(quote)
    return service
