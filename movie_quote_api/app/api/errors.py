"""
Exception handlers translating service errors into HTTP responses.

Every error response uses the ``QuoteErrorResponse`` body.  Domain
exceptions keep their message; request validation failures list each
failing field in ``details``; anything unexpected is logged with its
traceback and reported with a generic message only.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    DuplicateQuoteError,
    ErrorCodes,
    InvalidArgumentError,
    QuoteNotFoundError,
    QuoteServiceError,
    QuoteValidationError,
)
from ..schemas.quote import QuoteErrorResponse, field_message

logger = logging.getLogger(__name__)

# Status codes for domain errors.  Unlisted subclasses fall back to 500.
STATUS_BY_ERROR = {
    QuoteNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateQuoteError: status.HTTP_409_CONFLICT,
    QuoteValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
}


def error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: Optional[List[str]] = None,
) -> JSONResponse:
    body = QuoteErrorResponse(message=message, error_code=error_code, details=details or [])
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
    )


def _format_validation_error(error: Dict[str, Any]) -> str:
    # Drop the "body"/"query"/"path" prefix so the entry names the field.
    loc = [str(part) for part in error.get("loc", ())]
    if len(loc) > 1:
        loc = loc[1:]
    field = ".".join(loc) or "request"
    message = field_message(field, error.get("type", ""), error.get("msg", "invalid value"))
    return f"{field}: {message}"


async def handle_quote_service_error(request: Request, exc: QuoteServiceError) -> JSONResponse:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc)
    return error_response(status_code, exc.message, exc.error_code, exc.details)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [_format_validation_error(error) for error in exc.errors()]
    for detail in details:
        logger.debug("Validation error detail - %s", detail)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        ErrorCodes.VALIDATION_ERROR,
        details,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        ErrorCodes.INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to ``app``."""
    app.add_exception_handler(QuoteServiceError, handle_quote_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
