"""
Business logic for movie quotes.

``QuoteService`` enforces the rules that sit above raw storage:
creation always goes through store‑assigned ids, required fields
must be non‑blank after trimming, a movie may not contain the same
line by the same character twice, and search terms are length
checked.  It also selects the quote of the day.

The service owns no quote data.  It is constructed with a
:class:`~movie_quote_api.app.core.store.QuoteStore` and, optionally, a
callable returning today's date so that the daily selection can be
pinned in tests.
"""

import dataclasses
import logging
import random
import threading
from datetime import date
from typing import Callable, List, Optional

from ..core.exceptions import (
    DuplicateQuoteError,
    InvalidArgumentError,
    QuoteNotFoundError,
    QuoteValidationError,
)
from ..core.store import QuoteStore
from ..models.quote import Quote

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)


def epoch_day(day: date) -> int:
    """Number of days between 1970‑01‑01 and ``day``."""
    return (day - EPOCH).days


def seeded_shuffle(items: List[Quote], seed: int) -> List[Quote]:
    """Return a Fisher–Yates shuffled copy of ``items``.

    The permutation depends only on ``seed`` and on the order of
    ``items``: ``random.Random(seed)`` supplies the swap indices, walking
    from the last position down to the second.
    """
    rng = random.Random(seed)
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class QuoteService:
    """Service for managing movie quotes."""

    MIN_SEARCH_LENGTH = 1
    MAX_SEARCH_LENGTH = 100

    def __init__(self, store: QuoteStore, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today
        # Serialises every write with the lookups and duplicate check before it.
        self._write_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def add_quote(self, quote: Quote) -> Quote:
        """Validate and store a new quote.

        Raises
        ------
        InvalidArgumentError
            If the quote already carries an id.
        QuoteValidationError
            If a text field is blank or the release year is not positive.
        DuplicateQuoteError
            If the movie already has this line by this character.
        """
        if quote.id is not None:
            logger.warning("Rejected creation of quote with pre-assigned id %s", quote.id)
            raise InvalidArgumentError("Cannot create quote with existing ID. Use update instead.")

        candidate = self._normalised(quote)
        with self._write_lock:
            self._check_for_duplicate(candidate)
            saved = self.store.save(candidate)
        logger.info("Created quote %s for '%s'", saved.id, saved.movie_title)
        return saved

    def get_all_quotes(self) -> List[Quote]:
        return self.store.find_all()

    def get_quote_by_id(self, quote_id: str) -> Quote:
        quote = self.store.find_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(f"Quote not found with id: {quote_id}")
        return quote

    def update_quote(self, quote_id: str, quote: Quote) -> Quote:
        """Replace the content of an existing quote.

        ``id`` and ``created_at`` of the stored quote are kept; every
        other field comes from ``quote`` and goes through the same
        validation and duplicate check as :meth:`add_quote` (the quote
        being replaced does not count as a duplicate of itself).
        """
        with self._write_lock:
            existing = self.get_quote_by_id(quote_id)
            candidate = dataclasses.replace(
                self._normalised(quote),
                id=existing.id,
                created_at=existing.created_at,
            )
            self._check_for_duplicate(candidate, ignore_id=existing.id)
            saved = self.store.save(candidate)
        logger.info("Updated quote %s", saved.id)
        return saved

    def delete_quote(self, quote_id: str) -> None:
        # Shares the write lock so an in-flight update cannot re-save a deleted quote.
        with self._write_lock:
            deleted = self.store.delete_by_id(quote_id)
        if not deleted:
            raise QuoteNotFoundError(f"Quote not found with id: {quote_id}")
        logger.info("Deleted quote %s", quote_id)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_quotes(
        self,
        character: Optional[str] = None,
        movie_title: Optional[str] = None,
    ) -> List[Quote]:
        """Search by character and/or movie title.

        Both terms are case‑insensitive substring filters.  With both
        terms the result is the intersection of the two searches; with
        neither, every quote is returned.
        """
        logger.debug("Searching quotes: character=%r, movie_title=%r", character, movie_title)
        if character is not None and movie_title is not None:
            self._validate_search_term(character, "character")
            self._validate_search_term(movie_title, "movie title")
            by_character = set(self.store.find_by_character_containing(character))
            by_movie = set(self.store.find_by_movie_title_containing(movie_title))
            return sorted(by_character & by_movie, key=lambda q: q.created_at, reverse=True)
        if character is not None:
            self._validate_search_term(character, "character")
            return self.store.find_by_character_containing(character)
        if movie_title is not None:
            self._validate_search_term(movie_title, "movie title")
            return self.store.find_by_movie_title_containing(movie_title)
        return self.get_all_quotes()

    # -------------------------------------------------------------------------
    # Quote of the day
    # -------------------------------------------------------------------------

    def get_quote_of_the_day(self) -> Quote:
        """Pick one quote per calendar day.

        The full listing is shuffled with :func:`seeded_shuffle` using
        the epoch day of today's date as seed, and the first element is
        returned.  Repeated calls on the same day over an unchanged
        collection return the same quote.
        """
        quotes = self.get_all_quotes()
        if not quotes:
            raise QuoteNotFoundError("No quotes available for quote of the day")
        today = self._today()
        seed = epoch_day(today)
        selected = seeded_shuffle(quotes, seed)[0]
        logger.debug("Quote of the day for %s (seed %d): %s", today, seed, selected.id)
        return selected

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalised(quote: Quote) -> Quote:
        """Return ``quote`` with trimmed text fields, rejecting invalid data."""
        text = quote.text.strip()
        character = quote.character.strip()
        movie_title = quote.movie_title.strip()
        if not text:
            raise QuoteValidationError("Quote text cannot be blank")
        if not character:
            raise QuoteValidationError("Character name cannot be blank")
        if not movie_title:
            raise QuoteValidationError("Movie title cannot be blank")
        if quote.release_year <= 0:
            raise QuoteValidationError("Release year must be positive")
        return dataclasses.replace(quote, text=text, character=character, movie_title=movie_title)

    def _check_for_duplicate(self, quote: Quote, ignore_id: Optional[str] = None) -> None:
        text = quote.text.lower()
        character = quote.character.lower()
        for existing in self.store.find_by_movie_title_containing(quote.movie_title):
            if existing.id == ignore_id:
                continue
            if existing.text.lower() == text and existing.character.lower() == character:
                logger.info("Duplicate quote rejected for '%s'", quote.movie_title)
                raise DuplicateQuoteError(
                    f"Quote '{quote.text[:30]}...' by {quote.character} "
                    f"already exists in {quote.movie_title}"
                )

    def _validate_search_term(self, term: str, field_name: str) -> None:
        trimmed = term.strip()
        if len(trimmed) < self.MIN_SEARCH_LENGTH:
            raise QuoteValidationError(
                f"{field_name} search term must be at least {self.MIN_SEARCH_LENGTH} character(s)"
            )
        if len(trimmed) > self.MAX_SEARCH_LENGTH:
            raise QuoteValidationError(
                f"{field_name} search term cannot exceed {self.MAX_SEARCH_LENGTH} characters"
            )
