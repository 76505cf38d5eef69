"""Movie Quote API client.

This module defines a small client wrapper around the REST API served
by ``movie_quote_api``.  It uses the ``requests`` library internally
to make HTTP calls and exposes one method per endpoint:

* :meth:`MovieQuoteAPI.list_quotes` – return all quotes, newest first.
* :meth:`MovieQuoteAPI.get_quote` – fetch a single quote by its identifier.
* :meth:`MovieQuoteAPI.create_quote` – add a quote.
* :meth:`MovieQuoteAPI.update_quote` – replace the content of a quote.
* :meth:`MovieQuoteAPI.delete_quote` – remove a quote.
* :meth:`MovieQuoteAPI.search_quotes` – search by character and/or movie.
* :meth:`MovieQuoteAPI.quote_of_the_day` – fetch today's quote.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with the keys ``status_code``, ``message`` and
``error_code`` taken from the service's error payload when available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class MovieQuoteAPI:
    """Client for interacting with the movie quote API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/quotes",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            api_prefix: Path under which the quote endpoints are mounted.
            timeout: Timeout in seconds for each request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str = "", *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against the quote endpoints.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the quote prefix (e.g. ``/search``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body,
            or ``None`` for empty responses.
        """
        url = f"{self.base_url}{self.api_prefix}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            return None, self._error_from_response(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "error_code": None}

    @staticmethod
    def _error_from_response(exc: requests.HTTPError) -> Error:
        response = exc.response
        status = response.status_code if response is not None else None
        message = ""
        error_code = None
        if response is not None:
            try:
                err_json = response.json()
                message = err_json.get("message") or err_json.get("detail") or str(err_json)
                error_code = err_json.get("errorCode")
                details = err_json.get("details")
                if details:
                    message = f"{message}: {'; '.join(details)}"
            except ValueError:
                message = response.text
        if not message:
            message = str(exc)
        logger.error("API request failed (%s): %s", status, message)
        return {"status_code": status, "message": message, "error_code": error_code}

    @staticmethod
    def _payload(text: str, character: str, movie_title: str, release_year: int) -> Dict[str, Any]:
        return {
            "text": text,
            "character": character,
            "movieTitle": movie_title,
            "releaseYear": release_year,
        }

    # ------------------------------------------------------------------
    # Quote operations
    # ------------------------------------------------------------------
    def list_quotes(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all quotes, newest first."""
        data, error = self._request("GET")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_quote(self, quote_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single quote by ID."""
        return self._request("GET", f"/{quote_id}")

    def create_quote(
        self, text: str, character: str, movie_title: str, release_year: int
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a quote and return it with its assigned ``id``."""
        return self._request(
            "POST", json_body=self._payload(text, character, movie_title, release_year)
        )

    def update_quote(
        self, quote_id: Any, text: str, character: str, movie_title: str, release_year: int
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace the content of an existing quote."""
        return self._request(
            "PUT", f"/{quote_id}", json_body=self._payload(text, character, movie_title, release_year)
        )

    def delete_quote(self, quote_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a quote.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/{quote_id}")
        if error:
            return False, error
        return True, None

    def search_quotes(
        self, character: Optional[str] = None, movie: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Search quotes by character and/or movie title.

        Parameters left as ``None`` are not sent.
        """
        params = {key: value for key, value in (("character", character), ("movie", movie)) if value is not None}
        data, error = self._request("GET", "/search", params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def quote_of_the_day(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve the quote of the day."""
        return self._request("GET", "/today")
