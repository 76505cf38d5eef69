"""Tests for QuoteService."""

import dataclasses
import threading
from datetime import date, timedelta

import pytest

from movie_quote_api.app.core.exceptions import (
    DuplicateQuoteError,
    ErrorCodes,
    InvalidArgumentError,
    QuoteNotFoundError,
    QuoteValidationError,
)
from movie_quote_api.app.services.quote_service import (
    QuoteService,
    epoch_day,
    seeded_shuffle,
)


class TestAddQuote:
    """Tests for quote creation."""

    def test_add_assigns_id_and_trims(self, service, make_quote):
        quote = service.add_quote(
            make_quote("  Why so serious?  ", " Joker ", " The Dark Knight\t")
        )

        assert quote.id == "1"
        assert quote.text == "Why so serious?"
        assert quote.character == "Joker"
        assert quote.movie_title == "The Dark Knight"

    def test_round_trip_by_id(self, service, make_quote):
        created = service.add_quote(make_quote())
        assert service.get_quote_by_id(created.id) == created

    def test_rejects_pre_assigned_id(self, service, make_quote):
        with pytest.raises(InvalidArgumentError) as exc_info:
            service.add_quote(dataclasses.replace(make_quote(), id="7"))
        assert exc_info.value.error_code == ErrorCodes.INVALID_ARGUMENT
        assert service.store.count() == 0

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"text": "   "}, "Quote text cannot be blank"),
            ({"character": ""}, "Character name cannot be blank"),
            ({"movie_title": "\t"}, "Movie title cannot be blank"),
            ({"release_year": 0}, "Release year must be positive"),
            ({"release_year": -1999}, "Release year must be positive"),
        ],
    )
    def test_rejects_invalid_fields(self, service, make_quote, overrides, message):
        with pytest.raises(QuoteValidationError, match=message):
            service.add_quote(make_quote(**overrides))
        assert service.store.count() == 0

    def test_rejects_duplicate_in_same_movie(self, service, make_quote):
        service.add_quote(make_quote("Why so serious?", "Joker", "The Dark Knight"))

        with pytest.raises(DuplicateQuoteError) as exc_info:
            service.add_quote(make_quote("WHY SO SERIOUS?", "joker", "the dark knight"))

        assert exc_info.value.error_code == ErrorCodes.DUPLICATE_QUOTE
        assert service.store.count() == 1

    def test_same_line_in_other_movie_is_allowed(self, service, make_quote):
        service.add_quote(make_quote("Why so serious?", "Joker", "The Dark Knight"))
        other = service.add_quote(make_quote("Why so serious?", "Joker", "Suicide Squad"))
        assert other.id == "2"

    def test_same_line_by_other_character_is_allowed(self, service, make_quote):
        service.add_quote(make_quote("Why so serious?", "Joker", "The Dark Knight"))
        other = service.add_quote(make_quote("Why so serious?", "Harvey Dent", "The Dark Knight"))
        assert other.character == "Harvey Dent"

    def test_duplicate_check_matches_by_title_containment(self, service, make_quote):
        # The existing title contains the new, shorter title.
        service.add_quote(make_quote("Why so serious?", "Joker", "The Dark Knight Returns"))
        with pytest.raises(DuplicateQuoteError):
            service.add_quote(make_quote("Why so serious?", "Joker", "Dark Knight"))


class TestGetAndDelete:
    """Tests for lookup, listing and deletion."""

    def test_get_missing_raises_not_found(self, service):
        with pytest.raises(QuoteNotFoundError, match="Quote not found with id: 3"):
            service.get_quote_by_id("3")

    def test_get_all_newest_first(self, populated_service):
        quotes = populated_service.get_all_quotes()
        assert [q.id for q in quotes] == ["5", "4", "3", "2", "1"]

    def test_delete_removes_quote(self, populated_service):
        before = populated_service.store.count()

        populated_service.delete_quote("2")

        assert populated_service.store.exists_by_id("2") is False
        assert populated_service.store.count() == before - 1

    def test_delete_missing_raises_not_found(self, service):
        with pytest.raises(QuoteNotFoundError):
            service.delete_quote("404")


class TestUpdateQuote:
    """Tests for replacing an existing quote."""

    def test_update_keeps_id_and_created_at(self, populated_service, make_quote):
        original = populated_service.get_quote_by_id("1")

        updated = populated_service.update_quote(
            "1", make_quote(" Let's put a smile on that face. ", "Joker", "The Dark Knight", minutes=90)
        )

        assert updated.id == "1"
        assert updated.created_at == original.created_at
        assert updated.text == "Let's put a smile on that face."
        assert populated_service.get_quote_by_id("1") == updated
        assert populated_service.store.count() == 5

    def test_update_with_unchanged_content_is_not_a_duplicate(self, populated_service, make_quote):
        updated = populated_service.update_quote("1", make_quote(release_year=2009))
        assert updated.release_year == 2009

    def test_update_to_existing_content_is_duplicate(self, populated_service, make_quote):
        with pytest.raises(DuplicateQuoteError):
            populated_service.update_quote("1", make_quote("I'm the Batman.", "Batman", "The Dark Knight"))

    def test_update_missing_raises_not_found(self, service, make_quote):
        with pytest.raises(QuoteNotFoundError):
            service.update_quote("8", make_quote())

    def test_update_validates_fields(self, populated_service, make_quote):
        with pytest.raises(QuoteValidationError):
            populated_service.update_quote("1", make_quote(text=" "))

    def test_delete_during_update_stays_deleted(self, populated_service, make_quote, monkeypatch):
        service = populated_service
        started = threading.Event()
        finished = threading.Event()
        check = service._check_for_duplicate

        def delete_in_background():
            started.set()
            service.delete_quote("1")
            finished.set()

        def check_then_race(quote, ignore_id=None):
            # Fire a delete after the update has looked the quote up.
            threading.Thread(target=delete_in_background, daemon=True).start()
            started.wait(timeout=1)
            finished.wait(timeout=0.2)
            check(quote, ignore_id=ignore_id)

        monkeypatch.setattr(service, "_check_for_duplicate", check_then_race)

        service.update_quote("1", make_quote(release_year=2009))

        assert finished.wait(timeout=2)
        assert service.store.exists_by_id("1") is False
        assert service.store.count() == 4


class TestSearchQuotes:
    """Tests for single and combined searches."""

    def test_search_by_character(self, populated_service):
        results = populated_service.search_quotes(character="Joker")
        assert [q.text for q in results] == ["Why so serious?"]

    def test_search_by_movie_title(self, populated_service):
        results = populated_service.search_quotes(movie_title="Dark Knight")
        assert [q.text for q in results] == ["I'm the Batman.", "Why so serious?"]

    def test_intersection(self, populated_service):
        results = populated_service.search_quotes(character="Joker", movie_title="Dark Knight")
        assert [q.text for q in results] == ["Why so serious?"]

    def test_intersection_is_sorted_newest_first(self, populated_service):
        # Only Terminator and Batman match both terms.
        results = populated_service.search_quotes(character="a", movie_title="the")
        assert [q.character for q in results] == ["Batman", "Terminator"]

    def test_empty_intersection(self, populated_service):
        assert populated_service.search_quotes(character="Joker", movie_title="The Terminator") == []

    def test_no_criteria_returns_all(self, populated_service):
        assert populated_service.search_quotes() == populated_service.get_all_quotes()

    @pytest.mark.parametrize("term", ["", "   ", "x" * 101])
    def test_invalid_character_term(self, populated_service, term):
        with pytest.raises(QuoteValidationError, match="character search term"):
            populated_service.search_quotes(character=term)

    def test_invalid_movie_term_in_combined_search(self, populated_service):
        with pytest.raises(QuoteValidationError, match="movie title search term"):
            populated_service.search_quotes(character="Joker", movie_title=" ")

    def test_term_of_max_length_is_accepted(self, populated_service):
        assert populated_service.search_quotes(movie_title="x" * 100) == []


class TestQuoteOfTheDay:
    """Tests for the deterministic daily selection."""

    def test_empty_store_raises_not_found(self, service):
        with pytest.raises(QuoteNotFoundError, match="No quotes available"):
            service.get_quote_of_the_day()

    def test_stable_within_a_day(self, populated_service):
        first = populated_service.get_quote_of_the_day()
        second = populated_service.get_quote_of_the_day()
        assert first == second

    def test_reproducible_after_clear_and_re_add(self, populated_service, sample_quotes):
        before = populated_service.get_quote_of_the_day()

        populated_service.store.clear()
        for quote in sample_quotes:
            populated_service.add_quote(quote)

        assert populated_service.get_quote_of_the_day() == before

    def test_matches_seeded_shuffle_of_listing(self, populated_service):
        seed = epoch_day(date(2024, 1, 15))
        expected = seeded_shuffle(populated_service.get_all_quotes(), seed)[0]
        assert populated_service.get_quote_of_the_day() == expected

    def test_selection_varies_across_days(self, store, sample_quotes):
        current = {"day": date(2024, 1, 1)}
        service = QuoteService(store, today=lambda: current["day"])
        for quote in sample_quotes:
            service.add_quote(quote)

        picks = set()
        for offset in range(60):
            current["day"] = date(2024, 1, 1) + timedelta(days=offset)
            picks.add(service.get_quote_of_the_day().id)

        assert len(picks) > 1


class TestHelpers:
    """Tests for the date seed and shuffle helpers."""

    def test_epoch_day(self):
        assert epoch_day(date(1970, 1, 1)) == 0
        assert epoch_day(date(1970, 1, 2)) == 1
        assert epoch_day(date(2024, 1, 15)) == 19737

    def test_seeded_shuffle_is_deterministic_permutation(self, sample_quotes):
        first = seeded_shuffle(sample_quotes, 19737)
        second = seeded_shuffle(sample_quotes, 19737)

        assert first == second
        assert sorted(first, key=lambda q: q.text) == sorted(sample_quotes, key=lambda q: q.text)

    def test_seeded_shuffle_does_not_modify_input(self, sample_quotes):
        original = list(sample_quotes)
        seeded_shuffle(sample_quotes, 1)
        assert sample_quotes == original

    def test_seeded_shuffle_of_single_item(self, make_quote):
        quote = make_quote()
        assert seeded_shuffle([quote], 5) == [quote]
