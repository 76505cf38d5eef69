"""
In‑memory quote storage.

``QuoteStore`` keeps quotes in a dictionary keyed by id and hands out
ids from a monotonically increasing counter starting at ``1``.  Ids
are never reused, even after deletes; only :meth:`QuoteStore.clear`
resets the counter.  The store is memory resident and is lost when
the process exits.

All access goes through a single re‑entrant lock so that the store can
be shared by concurrently running request handlers.  Read operations
take a snapshot of the values under the lock and sort outside of it.
"""

import dataclasses
import logging
import threading
from typing import Callable, Dict, List, Optional

from ..models.quote import Quote

logger = logging.getLogger(__name__)


class QuoteStore:
    """Thread‑safe in‑memory repository for :class:`Quote` records."""

    def __init__(self) -> None:
        self._quotes: Dict[str, Quote] = {}
        self._next_id = 1
        self._lock = threading.RLock()
        logger.debug("QuoteStore initialised, id generator starts at 1")

    def save(self, quote: Quote) -> Quote:
        """Insert a new quote or overwrite an existing one.

        A quote without an ``id`` receives the next generated id and is
        inserted.  A quote carrying an ``id`` replaces whatever is
        stored under that id; callers are expected to pass an id that
        already exists.  Returns the stored quote.
        """
        with self._lock:
            if quote.id is None:
                saved = dataclasses.replace(quote, id=self._generate_id())
                logger.info("Saved new quote %s from '%s'", saved.id, saved.movie_title)
            else:
                saved = quote
                logger.info("Updated quote %s", saved.id)
            self._quotes[saved.id] = saved
            return saved

    def find_by_id(self, quote_id: str) -> Optional[Quote]:
        with self._lock:
            quote = self._quotes.get(quote_id)
        logger.debug("Lookup of quote %s: %s", quote_id, "hit" if quote else "miss")
        return quote

    def find_all(self) -> List[Quote]:
        """Return every stored quote, newest first."""
        return self._sorted(self._snapshot())

    def find_by_character_containing(self, term: str) -> List[Quote]:
        """Case‑insensitive substring search on ``character``."""
        needle = term.strip().lower()
        return self._filter(lambda q: needle in q.character.lower())

    def find_by_movie_title_containing(self, term: str) -> List[Quote]:
        """Case‑insensitive substring search on ``movie_title``."""
        needle = term.strip().lower()
        return self._filter(lambda q: needle in q.movie_title.lower())

    def delete_by_id(self, quote_id: str) -> bool:
        """Remove a quote.  Returns ``True`` if something was deleted."""
        with self._lock:
            removed = self._quotes.pop(quote_id, None)
            remaining = len(self._quotes)
        if removed is None:
            logger.debug("Nothing to delete for id %s", quote_id)
            return False
        logger.info("Deleted quote %s, %d remaining", quote_id, remaining)
        return True

    def count(self) -> int:
        with self._lock:
            return len(self._quotes)

    def exists_by_id(self, quote_id: str) -> bool:
        with self._lock:
            return quote_id in self._quotes

    def clear(self) -> None:
        """Drop all quotes and reset the id generator to ``1``."""
        with self._lock:
            cleared = len(self._quotes)
            self._quotes.clear()
            self._next_id = 1
        logger.info("Store cleared (%d quotes removed), id generator reset", cleared)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _generate_id(self) -> str:
        # Caller holds the lock.
        quote_id = str(self._next_id)
        self._next_id += 1
        return quote_id

    def _snapshot(self) -> List[Quote]:
        with self._lock:
            return list(self._quotes.values())

    def _filter(self, predicate: Callable[[Quote], bool]) -> List[Quote]:
        return self._sorted(q for q in self._snapshot() if predicate(q))

    @staticmethod
    def _sorted(quotes) -> List[Quote]:
        # sorted() is stable, so equal timestamps keep insertion order.
        return sorted(quotes, key=lambda q: q.created_at, reverse=True)
