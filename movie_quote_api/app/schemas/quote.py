"""
Pydantic schemas for movie quotes.

``QuoteCreate`` is the request body for creating or replacing a
quote, ``QuoteRead`` is the response body and ``QuoteErrorResponse``
is the body of every error response.  Field names travel in camelCase
on the wire (``movieTitle``, ``releaseYear``, ``createdAt``) while the
Python attributes use snake_case.

Text fields of ``QuoteCreate`` are stripped before their length limits
are checked, so whitespace‑only values fail request validation just
like empty ones.  ``FIELD_MESSAGES`` holds the messages reported for
each failing request field.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from ..models.quote import Quote


# Messages for request validation errors, keyed by wire field name and
# pydantic error type.  Unlisted errors keep pydantic's own message.
FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "text": {
        "missing": "Quote text is required",
        "string_too_short": "Quote text is required",
        "string_too_long": "Quote text cannot exceed 500 characters",
    },
    "character": {
        "missing": "Character name is required",
        "string_too_short": "Character name is required",
        "string_too_long": "Character name cannot exceed 100 characters",
    },
    "movieTitle": {
        "missing": "Movie title is required",
        "string_too_short": "Movie title is required",
        "string_too_long": "Movie title cannot exceed 200 characters",
    },
    "releaseYear": {
        "greater_than_equal": "Release year must be after 1900",
        "less_than_equal": "Release year cannot be in far future",
    },
}


def field_message(field: str, error_type: str, default: str) -> str:
    """Return the message for ``error_type`` on ``field``, or ``default``."""
    return FIELD_MESSAGES.get(field, {}).get(error_type, default)


class QuoteCreate(BaseModel):
    """Schema for creating (or fully replacing) a quote."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="The quoted line",
        examples=["Why so serious?"],
    )
    character: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Character who says the line",
        examples=["Joker"],
    )
    movie_title: str = Field(
        ...,
        alias="movieTitle",
        min_length=1,
        max_length=200,
        examples=["The Dark Knight"],
    )
    release_year: int = Field(..., alias="releaseYear", ge=1900, le=2030, examples=[2008])

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    def to_model(self) -> Quote:
        """Build an unsaved domain quote (no id) from the payload."""
        return Quote(
            text=self.text,
            character=self.character,
            movie_title=self.movie_title,
            release_year=self.release_year,
        )


class QuoteRead(BaseModel):
    """Schema for reading a quote from the API."""

    id: str
    text: str
    character: str
    movie_title: str = Field(..., alias="movieTitle")
    release_year: int = Field(..., alias="releaseYear")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {
        "populate_by_name": True,
    }

    @classmethod
    def from_model(cls, quote: Quote) -> "QuoteRead":
        return cls(
            id=quote.id,
            text=quote.text,
            character=quote.character,
            movie_title=quote.movie_title,
            release_year=quote.release_year,
            created_at=quote.created_at,
        )


class QuoteErrorResponse(BaseModel):
    """Body returned with every non‑2xx response.

    ``error_code`` is one of the constants in
    :class:`~movie_quote_api.app.core.exceptions.ErrorCodes`.
    ``details`` lists individual problems, e.g. one entry per invalid
    request field.
    """

    message: str
    error_code: str = Field(..., alias="errorCode")
    timestamp: datetime = Field(default_factory=datetime.now)
    details: List[str] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
    }
