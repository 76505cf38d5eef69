"""
Quote endpoints.

These routes expose the quote collection: create, list, fetch, replace
and delete quotes, search by character and/or movie title, and fetch
the quote of the day.  Handlers only translate between HTTP and the
service; errors raised by the service are turned into responses by
the handlers in ``api.errors``.

``/search`` and ``/today`` are declared before ``/{quote_id}`` so that
they are not captured as ids.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from movie_quote_api.app.core.deps import get_quote_service
from movie_quote_api.app.schemas.quote import QuoteCreate, QuoteRead
from movie_quote_api.app.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=QuoteRead, status_code=status.HTTP_201_CREATED)
async def create_quote(
    quote_in: QuoteCreate,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteRead:
    """Create a new quote.  The id is assigned by the server."""
    logger.debug("Creating quote for '%s' (%s)", quote_in.movie_title, quote_in.release_year)
    quote = service.add_quote(quote_in.to_model())
    return QuoteRead.from_model(quote)


@router.get("", response_model=List[QuoteRead])
async def list_quotes(service: QuoteService = Depends(get_quote_service)) -> List[QuoteRead]:
    """Return all quotes, newest first."""
    return [QuoteRead.from_model(q) for q in service.get_all_quotes()]


@router.get("/search", response_model=List[QuoteRead])
async def search_quotes(
    character: Optional[str] = Query(None, description="Substring of the character name"),
    movie: Optional[str] = Query(None, description="Substring of the movie title"),
    service: QuoteService = Depends(get_quote_service),
) -> List[QuoteRead]:
    """Search quotes by character and/or movie title.

    - **character**: case‑insensitive substring of the character name.
    - **movie**: case‑insensitive substring of the movie title.

    When both are given only quotes matching both are returned.  With
    neither, the full list is returned.  Terms must be 1–100
    characters after trimming.
    """
    results = service.search_quotes(character=character, movie_title=movie)
    return [QuoteRead.from_model(q) for q in results]


@router.get("/today", response_model=QuoteRead)
async def quote_of_the_day(service: QuoteService = Depends(get_quote_service)) -> QuoteRead:
    """Return the quote of the day.

    The same quote is returned all day as long as the collection does
    not change.  Returns HTTP 404 if there are no quotes.
    """
    return QuoteRead.from_model(service.get_quote_of_the_day())


@router.get("/{quote_id}", response_model=QuoteRead)
async def get_quote(quote_id: str, service: QuoteService = Depends(get_quote_service)) -> QuoteRead:
    """Retrieve a single quote by its ID."""
    return QuoteRead.from_model(service.get_quote_by_id(quote_id))


@router.put("/{quote_id}", response_model=QuoteRead)
async def update_quote(
    quote_id: str,
    quote_in: QuoteCreate,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteRead:
    """Replace the content of an existing quote.

    The id and creation time are preserved.
    """
    quote = service.update_quote(quote_id, quote_in.to_model())
    return QuoteRead.from_model(quote)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(quote_id: str, service: QuoteService = Depends(get_quote_service)) -> None:
    """Delete a quote.  Returns HTTP 404 if it does not exist."""
    service.delete_quote(quote_id)
    return None
