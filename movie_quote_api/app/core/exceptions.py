"""
Exception types raised by the quote service.

Each exception carries the ``error_code`` reported to API clients and
an optional list of ``details``.  The HTTP layer maps the classes onto
status codes in ``api.errors``; services never build HTTP responses
themselves.
"""

from typing import List, Optional


class ErrorCodes:
    """Error codes exposed in the ``errorCode`` field of error payloads."""

    QUOTE_NOT_FOUND = "QUOTE_NOT_FOUND"
    DUPLICATE_QUOTE = "DUPLICATE_QUOTE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class QuoteServiceError(Exception):
    """Base class for all errors raised by the quote domain."""

    error_code: str = ErrorCodes.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class QuoteValidationError(QuoteServiceError):
    """Malformed or out‑of‑range input (blank fields, bad year, search term length)."""

    error_code = ErrorCodes.INVALID_ARGUMENT


class InvalidArgumentError(QuoteServiceError):
    """The call itself is not allowed, e.g. creating a quote that already has an id."""

    error_code = ErrorCodes.INVALID_ARGUMENT


class DuplicateQuoteError(QuoteServiceError):
    """A quote with the same text and character already exists for the movie."""

    error_code = ErrorCodes.DUPLICATE_QUOTE


class QuoteNotFoundError(QuoteServiceError):
    """The requested quote does not exist (or the collection is empty)."""

    error_code = ErrorCodes.QUOTE_NOT_FOUND
